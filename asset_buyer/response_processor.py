"""Turns raw order provider responses into orders with remaining fillable amounts."""

import logging
from typing import List, Optional

from asset_buyer.errors import InvalidOrderProviderResponseError
from asset_buyer.orders import (
    Order, compute_remaining_fillable, get_maker_fill_amount, is_open_order, will_order_expire,
)
from asset_buyer.providers import (
    OrderAndTraderInfo, OrderProviderRequest, OrderProviderResponse, OrderStatus, OrderValidator,
)
from asset_buyer.types import OrdersAndFillableAmounts

logger = logging.getLogger(__name__)

NULL_TAKER_ADDRESS = ""


def raise_if_invalid_response(response: OrderProviderResponse, request: OrderProviderRequest):
    """The provider is injected, so check it only returned the requested pair."""
    offending = [
        o for o in response.orders
        if o.maker_asset_data != request.maker_asset_data or o.taker_asset_data != request.taker_asset_data
    ]
    if offending:
        raise InvalidOrderProviderResponseError(
            f"Order provider returned {len(offending)} orders outside the requested pair",
            offending_order_hashes=[o.hash_hex() for o in offending],
        )


async def process_orders(
    response: OrderProviderResponse,
    is_maker_asset_fee_token: bool,
    expiry_buffer_seconds: int,
    order_validator: Optional[OrderValidator] = None,
    now: Optional[float] = None,
) -> OrdersAndFillableAmounts:
    """Drop unusable orders and work out how much of each remaining order can be filled."""
    orders = filter_expired_and_non_open_orders(response.orders, expiry_buffer_seconds, now)
    if not orders:
        return OrdersAndFillableAmounts()

    if order_validator is not None:
        try:
            infos = await order_validator.get_orders_and_traders_info(
                orders, [NULL_TAKER_ADDRESS] * len(orders),
            )
            return fillable_amounts_from_chain(orders, infos, is_maker_asset_fee_token)
        except Exception as e:
            logger.warning(f"Order validation failed, using provider fill amounts: {e}")
    return fillable_amounts_from_provider(orders)


def filter_expired_and_non_open_orders(
    orders: List[Order], expiry_buffer_seconds: int, now: Optional[float] = None,
) -> List[Order]:
    kept = [o for o in orders if is_open_order(o) and not will_order_expire(o, expiry_buffer_seconds, now)]
    if len(kept) != len(orders):
        logger.debug(f"Dropped {len(orders) - len(kept)} expired or non-open orders")
    return kept


def fillable_amounts_from_chain(
    orders: List[Order], infos: List[OrderAndTraderInfo], is_maker_asset_fee_token: bool,
) -> OrdersAndFillableAmounts:
    if len(infos) != len(orders):
        raise ValueError(f"Expected info for {len(orders)} orders, got {len(infos)}")
    pairs = []
    for order, info in zip(orders, infos):
        if info.order_info.order_status != OrderStatus.FILLABLE:
            logger.debug(f"Skipping order {order.hash_hex()[:16]}: {info.order_info.order_status.name}")
            continue
        remaining_taker = order.taker_asset_amount - info.order_info.order_taker_asset_filled_amount
        fillable = compute_remaining_fillable(
            order_fee=order.maker_fee,
            order_asset_amount=order.maker_asset_amount,
            is_trader_asset_fee_token=is_maker_asset_fee_token,
            transferrable_asset_amount=info.trader_info.maker_balance,
            transferrable_fee_amount=info.trader_info.maker_fee_balance,
            remaining_order_asset_amount=get_maker_fill_amount(order, max(0, remaining_taker)),
        )
        if fillable > 0:
            pairs.append((order, fillable))
    return OrdersAndFillableAmounts.from_pairs(pairs)


def fillable_amounts_from_provider(orders: List[Order]) -> OrdersAndFillableAmounts:
    pairs = []
    for order in orders:
        amount = order.remaining_fillable_maker_asset_amount
        if amount is None:
            amount = order.maker_asset_amount
        if amount > 0:
            pairs.append((order, amount))
    return OrdersAndFillableAmounts.from_pairs(pairs)
