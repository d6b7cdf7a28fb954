"""Greedy selection of orders covering a maker amount."""

from dataclasses import dataclass
from typing import Tuple

from asset_buyer.orders import (
    get_net_fee_token_amount, get_taker_fee_amount, get_taker_fill_amount, get_taker_fill_amount_for_fee_order,
)
from asset_buyer.types import OrdersAndFillableAmounts


@dataclass(frozen=True)
class OrderSelection:
    """
    orders: selected orders with their full fillable amounts.
    fill_amounts: how much of each selected order is delivered to the buyer.
    consumed_amounts: how much of each order's fillable amount the fills use up.
        Equal to fill_amounts unless the order's own fee is netted out.
    remaining_fill_amount: what the orders could not cover (0 when fully covered).
    """
    orders: OrdersAndFillableAmounts
    fill_amounts: Tuple[int, ...]
    consumed_amounts: Tuple[int, ...]
    remaining_fill_amount: int

    @property
    def total_filled(self) -> int:
        return sum(self.fill_amounts)


EMPTY_SELECTION = OrderSelection(
    orders=OrdersAndFillableAmounts(), fill_amounts=(), consumed_amounts=(), remaining_fill_amount=0,
)


def find_orders_that_cover_maker_asset_fill_amount(
    orders_and_fillable_amounts: OrdersAndFillableAmounts,
    maker_asset_fill_amount: int,
    net_of_taker_fee: bool = False,
) -> OrderSelection:
    """
    Walk orders in the given order, taking as much of each as still needed.

    With net_of_taker_fee the orders sell the fee token, and the fee each one
    charges is taken out of what it can deliver. The gross amount taken from
    the order to deliver a net fill is recorded in consumed_amounts.
    """
    selected = []
    fills = []
    consumed = []
    remaining = maker_asset_fill_amount
    for order, fillable in orders_and_fillable_amounts.pairs():
        if remaining <= 0:
            break
        available = get_net_fee_token_amount(order, fillable) if net_of_taker_fee else fillable
        if available <= 0:
            continue
        take = min(remaining, available)
        selected.append((order, fillable))
        fills.append(take)
        if net_of_taker_fee:
            consumed.append(min(fillable, get_taker_fill_amount_for_fee_order(order, take)[1]))
        else:
            consumed.append(take)
        remaining -= take
    return OrderSelection(
        orders=OrdersAndFillableAmounts.from_pairs(selected),
        fill_amounts=tuple(fills),
        consumed_amounts=tuple(consumed),
        remaining_fill_amount=max(0, remaining),
    )


def total_taker_fee_for_fills(selection: OrderSelection) -> int:
    """Fee token owed for taking selection.fill_amounts from the selected orders."""
    return sum(
        get_taker_fee_amount(order, get_taker_fill_amount(order, fill))
        for order, fill in zip(selection.orders.orders, selection.fill_amounts)
    )
