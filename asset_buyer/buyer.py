"""AssetBuyer: sources orders for a pair and quotes the cost of buying from them."""

import asyncio
import logging
from typing import Callable, List, Optional, Sequence
from urllib.parse import urlparse

from pycardano import Network

from asset_buyer.asset_data import encode_asset_data, normalize_asset_data
from asset_buyer.cache import OrderCache
from asset_buyer.constants import DEFAULT_REQUEST_TIMEOUT, FEE_TOKENS
from asset_buyer.errors import (
    AssetUnavailableError, FeeTokenUnavailableError, InvalidInputError, InvalidOrderError,
)
from asset_buyer.liquidity import calculate_liquidity
from asset_buyer.options import AssetBuyerOpts, BuyQuoteRequestOpts, LiquidityRequestOpts
from asset_buyer.orders import Order
from asset_buyer.providers import (
    BasicOrderProvider, OrderProvider, OrderProviderRequest, OrderValidator,
    RelayerOrderProvider, RelayerOrderValidator,
)
from asset_buyer.quote_calculator import calculate_buy_quote, check_amount, to_slippage
from asset_buyer.relayer import RelayerClient
from asset_buyer.response_processor import process_orders, raise_if_invalid_response
from asset_buyer.types import (
    EMPTY_ORDERS_AND_FILLABLE_AMOUNTS, BuyQuote, LiquidityForAssetData, OrdersAndFillableAmounts, Token,
)

logger = logging.getLogger(__name__)


def _check_bool(name: str, value) -> bool:
    if not isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a bool, got {value!r}")
    return value


def _check_non_negative_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(f"{name} must be a non-negative integer, got {value!r}")
    return value


class AssetBuyer:
    """
    Quotes purchases of one asset with another from orders supplied by an OrderProvider.

    Orders are cached per maker/taker pair for options.order_refresh_interval_ms.
    An OrderValidator, if given, refines how much of each order is still fillable.

    Usage:
        buyer = AssetBuyer.for_relayer_url("wss://relayer.example/rpc")
        quote = await buyer.get_buy_quote(maker_asset_data, taker_asset_data, 1_000_000)
    """

    def __init__(
        self,
        order_provider: OrderProvider,
        order_validator: Optional[OrderValidator] = None,
        options: Optional[AssetBuyerOpts] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        options = options or AssetBuyerOpts()
        if not isinstance(order_provider, OrderProvider):
            raise InvalidInputError("order_provider must implement get_orders and the available asset data lookups")
        try:
            Network(options.network_id)
        except ValueError as e:
            raise InvalidInputError(f"Unknown network_id {options.network_id!r}") from e
        _check_non_negative_int("order_refresh_interval_ms", options.order_refresh_interval_ms)
        _check_non_negative_int("expiry_buffer_seconds", options.expiry_buffer_seconds)
        fee_token_asset_data = options.fee_token_asset_data
        if fee_token_asset_data is not None:
            fee_token_asset_data = normalize_asset_data(fee_token_asset_data)

        self.order_provider = order_provider
        self.order_validator = order_validator
        self.network_id = options.network_id
        self.order_refresh_interval_ms = options.order_refresh_interval_ms
        self.expiry_buffer_seconds = options.expiry_buffer_seconds
        self._fee_token_asset_data = fee_token_asset_data
        self._cache = OrderCache(options.order_refresh_interval_ms, clock=clock)
        self._relayer_client: Optional[RelayerClient] = None

    @classmethod
    def for_provided_orders(cls, orders: Sequence[Order], options: Optional[AssetBuyerOpts] = None) -> "AssetBuyer":
        """AssetBuyer over a fixed, non-empty set of orders."""
        if not orders:
            raise InvalidOrderError("Expected orders to contain at least one order")
        return cls(BasicOrderProvider(orders), options=options)

    @classmethod
    def for_relayer_url(
        cls,
        relayer_url: str,
        options: Optional[AssetBuyerOpts] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> "AssetBuyer":
        """AssetBuyer sourcing orders and order state from a relayer's WebSocket endpoint."""
        parsed = urlparse(relayer_url) if isinstance(relayer_url, str) else None
        if parsed is None or parsed.scheme not in ("ws", "wss") or not parsed.netloc:
            raise InvalidInputError(f"relayer_url must be a ws:// or wss:// URL, got {relayer_url!r}")
        options = options or AssetBuyerOpts()
        client = RelayerClient(relayer_url, username=username, password=password, timeout=timeout)
        buyer = cls(
            RelayerOrderProvider(client, options.network_id),
            order_validator=RelayerOrderValidator(client),
            options=options,
        )
        buyer._relayer_client = client
        return buyer

    async def close(self):
        if self._relayer_client:
            await self._relayer_client.disconnect()

    async def get_buy_quote(
        self,
        maker_asset_data: str,
        taker_asset_data: str,
        maker_asset_buy_amount: int,
        options: Optional[BuyQuoteRequestOpts] = None,
    ) -> BuyQuote:
        """
        Quote buying maker_asset_buy_amount of maker_asset_data with taker_asset_data.

        Raises AssetUnavailableError if no orders exist for the pair and
        InsufficientAssetLiquidityError / InsufficientFeeTokenLiquidityError if
        the orders cannot cover the amount or its fees.
        """
        options = options or BuyQuoteRequestOpts()
        maker_asset_data = normalize_asset_data(maker_asset_data)
        taker_asset_data = normalize_asset_data(taker_asset_data)
        check_amount("maker_asset_buy_amount", maker_asset_buy_amount)
        force = _check_bool("should_force_order_refresh", options.should_force_order_refresh)
        slippage = to_slippage(options.slippage_percentage)

        fee_token_asset_data = self._get_fee_token_asset_data_or_raise()
        is_maker_asset_fee_token = maker_asset_data == fee_token_asset_data

        # buying the fee token needs no fee orders
        if is_maker_asset_fee_token:
            orders = await self.get_orders_and_fillable_amounts(maker_asset_data, taker_asset_data, force)
            fee_orders = EMPTY_ORDERS_AND_FILLABLE_AMOUNTS
        else:
            orders, fee_orders = await asyncio.gather(
                self.get_orders_and_fillable_amounts(maker_asset_data, taker_asset_data, force),
                self.get_orders_and_fillable_amounts(fee_token_asset_data, taker_asset_data, force),
            )

        if not orders:
            raise AssetUnavailableError(
                f"No orders for maker asset {maker_asset_data} and taker asset {taker_asset_data}"
            )
        return calculate_buy_quote(orders, fee_orders, maker_asset_buy_amount, slippage, is_maker_asset_fee_token)

    async def get_buy_quote_for_tokens(
        self,
        maker_token: Token,
        taker_token: Token,
        maker_asset_buy_amount: int,
        options: Optional[BuyQuoteRequestOpts] = None,
    ) -> BuyQuote:
        """get_buy_quote for tokens given as policy id / asset name."""
        if not isinstance(maker_token, Token) or not isinstance(taker_token, Token):
            raise InvalidInputError("maker_token and taker_token must be Token instances")
        try:
            maker_asset_data = encode_asset_data(maker_token)
            taker_asset_data = encode_asset_data(taker_token)
        except ValueError as e:
            raise InvalidInputError(f"Token is not valid hex: {e}") from e
        return await self.get_buy_quote(maker_asset_data, taker_asset_data, maker_asset_buy_amount, options)

    async def get_liquidity_for_maker_taker_asset_data_pair(
        self,
        maker_asset_data: str,
        taker_asset_data: str,
        options: Optional[LiquidityRequestOpts] = None,
    ) -> LiquidityForAssetData:
        """Total fillable maker and taker amounts for the pair, without fees or slippage."""
        options = options or LiquidityRequestOpts()
        maker_asset_data = normalize_asset_data(maker_asset_data)
        taker_asset_data = normalize_asset_data(taker_asset_data)
        force = _check_bool("should_force_order_refresh", options.should_force_order_refresh)

        available = await self.order_provider.get_available_maker_asset_datas(taker_asset_data)
        if maker_asset_data not in available:
            return LiquidityForAssetData()

        orders = await self.get_orders_and_fillable_amounts(maker_asset_data, taker_asset_data, force)
        return calculate_liquidity(orders)

    async def get_available_taker_asset_datas(self, maker_asset_data: str) -> List[str]:
        """Asset datas that can be used to buy maker_asset_data."""
        maker_asset_data = normalize_asset_data(maker_asset_data)
        return await self.order_provider.get_available_taker_asset_datas(maker_asset_data)

    async def get_available_maker_asset_datas(self, taker_asset_data: str) -> List[str]:
        """Asset datas that can be bought with taker_asset_data."""
        taker_asset_data = normalize_asset_data(taker_asset_data)
        return await self.order_provider.get_available_maker_asset_datas(taker_asset_data)

    async def is_taker_maker_asset_data_pair_available(self, maker_asset_data: str, taker_asset_data: str) -> bool:
        maker_asset_data = normalize_asset_data(maker_asset_data)
        return maker_asset_data in await self.get_available_maker_asset_datas(taker_asset_data)

    async def get_orders_and_fillable_amounts(
        self,
        maker_asset_data: str,
        taker_asset_data: str,
        should_force_order_refresh: bool = False,
    ) -> OrdersAndFillableAmounts:
        """
        Orders for the pair from cache, or from the provider on a miss, a stale
        entry or a forced refresh. A failed fetch leaves the cache untouched.
        """
        maker_asset_data = normalize_asset_data(maker_asset_data)
        taker_asset_data = normalize_asset_data(taker_asset_data)
        _check_bool("should_force_order_refresh", should_force_order_refresh)

        if not should_force_order_refresh:
            cached = self._cache.get_fresh(maker_asset_data, taker_asset_data)
            if cached is not None:
                logger.debug(f"Order cache hit for {maker_asset_data[:16]}/{taker_asset_data[:16]}")
                return cached

        fee_token_asset_data = self._get_fee_token_asset_data_or_raise()
        request = OrderProviderRequest(
            maker_asset_data=maker_asset_data,
            taker_asset_data=taker_asset_data,
            network_id=self.network_id,
        )
        response = await self.order_provider.get_orders(request)
        raise_if_invalid_response(response, request)

        orders = await process_orders(
            response,
            is_maker_asset_fee_token=maker_asset_data == fee_token_asset_data,
            expiry_buffer_seconds=self.expiry_buffer_seconds,
            order_validator=self.order_validator,
        )
        self._cache.set(maker_asset_data, taker_asset_data, orders)
        logger.info(
            f"Refreshed {len(orders)} of {len(response.orders)} orders for "
            f"{maker_asset_data[:16]}/{taker_asset_data[:16]}"
        )
        return orders

    def _get_fee_token_asset_data_or_raise(self) -> str:
        if self._fee_token_asset_data is not None:
            return self._fee_token_asset_data
        token = FEE_TOKENS.get(self.network_id)
        if token is None:
            raise FeeTokenUnavailableError(f"No fee token known for network {self.network_id}")
        return encode_asset_data(token)
