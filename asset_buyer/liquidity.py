"""Available liquidity for a pair, ignoring fees and slippage."""

from asset_buyer.orders import get_taker_fill_amount
from asset_buyer.types import LiquidityForAssetData, OrdersAndFillableAmounts


def calculate_liquidity(orders_and_fillable_amounts: OrdersAndFillableAmounts) -> LiquidityForAssetData:
    maker_total = 0
    taker_total = 0
    for order, fillable in orders_and_fillable_amounts.pairs():
        maker_total += fillable
        taker_total += get_taker_fill_amount(order, fillable)
    return LiquidityForAssetData(
        maker_tokens_available_in_base_units=maker_total,
        taker_tokens_available_in_base_units=taker_total,
    )
