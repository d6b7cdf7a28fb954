"""Signed orders and fill arithmetic."""

from .base import Order, OrderDatum, is_open_order, will_order_expire
from .calculations import (
    ceil_div, compute_remaining_fillable, get_maker_fill_amount, get_net_fee_token_amount,
    get_taker_fee_amount, get_taker_fill_amount, get_taker_fill_amount_for_fee_order,
)
from .schema import validate_order_dict, validate_order_dicts

__all__ = [
    "Order", "OrderDatum", "is_open_order", "will_order_expire",
    "ceil_div", "compute_remaining_fillable", "get_maker_fill_amount", "get_net_fee_token_amount",
    "get_taker_fee_amount", "get_taker_fill_amount", "get_taker_fill_amount_for_fee_order",
    "validate_order_dict", "validate_order_dicts",
]
