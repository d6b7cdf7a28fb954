"""Buy quote calculation over primary and fee orders."""

import logging
from decimal import ROUND_CEILING, Decimal, InvalidOperation

from asset_buyer.errors import (
    InsufficientAssetLiquidityError, InsufficientFeeTokenLiquidityError, InvalidInputError,
)
from asset_buyer.market import (
    EMPTY_SELECTION, OrderSelection, find_orders_that_cover_maker_asset_fill_amount, total_taker_fee_for_fills,
)
from asset_buyer.orders import get_taker_fill_amount, get_taker_fill_amount_for_fee_order
from asset_buyer.types import BuyQuote, BuyQuoteInfo, OrdersAndFillableAmounts

logger = logging.getLogger(__name__)


def to_slippage(value) -> Decimal:
    """Validate a slippage fraction (e.g. 0.2 for 20%) and return it as a Decimal."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidInputError(f"slippage_percentage must be a number, got {value!r}")
    try:
        slippage = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidInputError(f"slippage_percentage is not a number: {value!r}") from e
    if not slippage.is_finite() or slippage < 0:
        raise InvalidInputError(f"slippage_percentage must be a non-negative finite number, got {value!r}")
    return slippage


def check_amount(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an integer amount in base units, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"{name} must not be negative")
    return value


def with_slippage(amount: int, slippage: Decimal) -> int:
    return int((Decimal(amount) * (1 + slippage)).to_integral_value(rounding=ROUND_CEILING))


def calculate_buy_quote(
    orders_and_fillable_amounts: OrdersAndFillableAmounts,
    fee_orders_and_fillable_amounts: OrdersAndFillableAmounts,
    maker_asset_buy_amount: int,
    slippage_percentage,
    is_maker_asset_fee_token: bool,
) -> BuyQuote:
    """
    Select orders covering maker_asset_buy_amount and price the purchase.

    Orders are walked in the order given (providers return best price first).
    When the maker asset is the fee token no fee orders are needed: the fee each
    order charges is netted out of what it delivers instead. The best case is the
    computed cost; the worst case inflates each part of it by the slippage.
    """
    maker_asset_buy_amount = check_amount("maker_asset_buy_amount", maker_asset_buy_amount)
    slippage = to_slippage(slippage_percentage)

    selection = find_orders_that_cover_maker_asset_fill_amount(
        orders_and_fillable_amounts, maker_asset_buy_amount, net_of_taker_fee=is_maker_asset_fee_token,
    )
    if selection.remaining_fill_amount > 0:
        raise InsufficientAssetLiquidityError(selection.total_filled)

    if is_maker_asset_fee_token:
        asset_cost = _fee_token_cost(selection)
        fee_selection = EMPTY_SELECTION
        fee_cost = 0
    else:
        asset_cost = sum(
            get_taker_fill_amount(order, fill)
            for order, fill in zip(selection.orders.orders, selection.fill_amounts)
        )
        fee_owed = total_taker_fee_for_fills(selection)
        fee_selection = find_orders_that_cover_maker_asset_fill_amount(
            fee_orders_and_fillable_amounts, fee_owed, net_of_taker_fee=True,
        )
        if fee_selection.remaining_fill_amount > 0:
            raise InsufficientFeeTokenLiquidityError(
                f"Fee orders cover {fee_selection.total_filled} of {fee_owed} fee tokens owed"
            )
        fee_cost = _fee_token_cost(fee_selection)

    best_case = BuyQuoteInfo(
        taker_asset_amount=asset_cost,
        fee_taker_asset_amount=fee_cost,
        total_taker_asset_amount=asset_cost + fee_cost,
    )
    worst_asset_cost = with_slippage(asset_cost, slippage)
    worst_fee_cost = with_slippage(fee_cost, slippage)
    worst_case = BuyQuoteInfo(
        taker_asset_amount=worst_asset_cost,
        fee_taker_asset_amount=worst_fee_cost,
        total_taker_asset_amount=worst_asset_cost + worst_fee_cost,
    )
    logger.debug(
        f"Quote for {maker_asset_buy_amount}: {len(selection.orders)} orders, "
        f"{len(fee_selection.orders)} fee orders, total {best_case.total_taker_asset_amount}"
        f"..{worst_case.total_taker_asset_amount}"
    )

    first_order = orders_and_fillable_amounts.orders[0] if orders_and_fillable_amounts else None
    return BuyQuote(
        maker_asset_data=first_order.maker_asset_data if first_order else "",
        taker_asset_data=first_order.taker_asset_data if first_order else "",
        maker_asset_buy_amount=maker_asset_buy_amount,
        orders=selection.orders,
        fill_amounts=selection.fill_amounts,
        consumed_amounts=selection.consumed_amounts,
        fee_orders=fee_selection.orders,
        best_case_quote_info=best_case,
        worst_case_quote_info=worst_case,
        slippage_percentage=slippage,
    )


def _fee_token_cost(selection: OrderSelection) -> int:
    """Taker amount to buy fill_amounts net fee tokens from orders that sell the fee token."""
    return sum(
        get_taker_fill_amount_for_fee_order(order, fill)[0]
        for order, fill in zip(selection.orders.orders, selection.fill_amounts)
    )
