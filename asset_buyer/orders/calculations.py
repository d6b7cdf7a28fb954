"""
Fill arithmetic for orders.

All amounts are integer base units. Exchange rates round in the maker's favour,
taker fees round in the taker's favour.
"""

from decimal import ROUND_DOWN, Decimal
from typing import Tuple

from .base import Order


def ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def get_taker_fill_amount(order: Order, maker_fill_amount: int) -> int:
    """Taker amount paid for maker_fill_amount (rounded up)."""
    return ceil_div(maker_fill_amount * order.taker_asset_amount, order.maker_asset_amount)


def get_maker_fill_amount(order: Order, taker_fill_amount: int) -> int:
    """Maker amount received for taker_fill_amount (rounded down)."""
    return taker_fill_amount * order.maker_asset_amount // order.taker_asset_amount


def get_taker_fee_amount(order: Order, taker_fill_amount: int) -> int:
    """Taker fee (in fee token) charged for taker_fill_amount (rounded down)."""
    return taker_fill_amount * order.taker_fee // order.taker_asset_amount


def get_taker_fill_amount_for_fee_order(order: Order, maker_fill_amount: int) -> Tuple[int, int]:
    """
    For a fee order every taker unit buys (maker_asset_amount - taker_fee) net fee tokens.

    Returns (taker_fill_amount, gross_maker_fill_amount); the gross amount exceeds
    maker_fill_amount by the fee the order itself charges.
    """
    net_maker_amount = order.maker_asset_amount - order.taker_fee
    if net_maker_amount <= 0:
        raise ValueError("Fee order charges a taker fee at least as large as its maker amount")
    taker_fill_amount = ceil_div(maker_fill_amount * order.taker_asset_amount, net_maker_amount)
    return taker_fill_amount, get_maker_fill_amount(order, taker_fill_amount)


def get_net_fee_token_amount(order: Order, maker_amount: int) -> int:
    """Fee tokens left from buying maker_amount of an order selling the fee token, after its own fee."""
    taker_fee = get_taker_fee_amount(order, get_taker_fill_amount(order, maker_amount))
    return max(0, maker_amount - taker_fee)


def compute_remaining_fillable(
    order_fee: int,
    order_asset_amount: int,
    is_trader_asset_fee_token: bool,
    transferrable_asset_amount: int,
    transferrable_fee_amount: int,
    remaining_order_asset_amount: int,
) -> int:
    """
    Maker amount of an order that can still be filled given the maker's balances.

    When the maker cannot cover the rest of the order and its fee, the fill is
    limited in whole multiples of (order_asset_amount / order_fee).
    """
    remaining_order_fee_amount = remaining_order_asset_amount * order_fee // order_asset_amount

    if is_trader_asset_fee_token:
        # asset and fee come out of the same balance
        sufficient = transferrable_asset_amount >= remaining_order_asset_amount + remaining_order_fee_amount
    else:
        sufficient = (
            transferrable_asset_amount >= remaining_order_asset_amount
            and transferrable_fee_amount >= remaining_order_fee_amount
        )
    if sufficient:
        return remaining_order_asset_amount

    if order_fee == 0:
        return min(remaining_order_asset_amount, transferrable_asset_amount)

    order_to_fee_ratio = Decimal(order_asset_amount) / Decimal(order_fee)
    fillable_times_in_fee_units = Decimal(min(transferrable_fee_amount, remaining_order_fee_amount))
    if is_trader_asset_fee_token:
        fillable_times_in_asset_units = Decimal(transferrable_asset_amount) / (order_to_fee_ratio + 1)
    else:
        fillable_times_in_asset_units = Decimal(transferrable_asset_amount) / order_to_fee_ratio

    partially_fillable = order_to_fee_ratio * min(fillable_times_in_asset_units, fillable_times_in_fee_units)
    return min(int(partially_fillable.to_integral_value(rounding=ROUND_DOWN)), remaining_order_asset_amount)
