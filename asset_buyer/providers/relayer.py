"""Relayer adapter implementing the OrderProvider and OrderValidator protocols."""

import logging
from typing import Any, Dict, List

from asset_buyer.asset_data import is_valid_asset_data, normalize_asset_data
from asset_buyer.constants import MAX_PER_PAGE
from asset_buyer.errors import InvalidOrderError, RelayerApiError, RelayerError
from asset_buyer.orders import Order, get_maker_fill_amount
from asset_buyer.relayer import RelayerClient
from .base import (
    OrderAndTraderInfo, OrderInfo, OrderProviderRequest, OrderProviderResponse, OrderStatus, TraderInfo,
)

logger = logging.getLogger(__name__)


class RelayerOrderProvider:
    """
    Wraps RelayerClient to provide the OrderProvider interface.

    Orders come from the asks side of the relayer's order book, so they arrive
    sorted best price first.
    """

    def __init__(self, client: RelayerClient, network_id: int):
        self.client = client
        self.network_id = network_id

    async def get_orders(self, request: OrderProviderRequest) -> OrderProviderResponse:
        try:
            orderbook = await self.client.get_orderbook(
                request.maker_asset_data, request.taker_asset_data, request.network_id,
            )
        except RelayerError as e:
            raise RelayerApiError(f"Failed to fetch orderbook: {e}") from e
        records = orderbook.get("asks", {}).get("records", [])
        return OrderProviderResponse(orders=self._convert(records))

    async def get_available_maker_asset_datas(self, taker_asset_data: str) -> List[str]:
        return await self._get_paired_asset_datas(taker_asset_data)

    async def get_available_taker_asset_datas(self, maker_asset_data: str) -> List[str]:
        return await self._get_paired_asset_datas(maker_asset_data)

    async def _get_paired_asset_datas(self, asset_data: str) -> List[str]:
        """Asset datas the relayer lists as pairs of asset_data (at most MAX_PER_PAGE)."""
        try:
            records = await self.client.get_asset_pairs(asset_data, self.network_id, MAX_PER_PAGE)
        except RelayerError as e:
            raise RelayerApiError(f"Failed to fetch asset pairs: {e}") from e
        paired = []
        for record in records:
            a = record.get("assetDataA", {}).get("assetData")
            b = record.get("assetDataB", {}).get("assetData")
            if not (is_valid_asset_data(a) and is_valid_asset_data(b)):
                logger.debug(f"Skipping asset pair with malformed asset data: {a!r} / {b!r}")
                continue
            a, b = normalize_asset_data(a), normalize_asset_data(b)
            paired.append(b if a == asset_data else a)
        return paired

    def _convert(self, records: List[Dict[str, Any]]) -> List[Order]:
        """Convert order book records, carrying the relayer's remaining amount onto each order."""
        orders = []
        for record in records:
            try:
                order = Order.from_dict(record.get("order", {}))
            except InvalidOrderError as e:
                raise RelayerApiError(f"Relayer returned a malformed order: {e}") from e
            remaining_taker = record.get("metaData", {}).get("remainingTakerAssetAmount")
            if remaining_taker is not None:
                order = order.with_remaining_fillable(get_maker_fill_amount(order, int(remaining_taker)))
            orders.append(order)
        return orders


class RelayerOrderValidator:
    """Order state lookup served by the relayer."""

    def __init__(self, client: RelayerClient):
        self.client = client

    async def get_orders_and_traders_info(
        self, orders: List[Order], taker_addresses: List[str],
    ) -> List[OrderAndTraderInfo]:
        raw = await self.client.get_orders_and_traders_info([o.to_dict() for o in orders], taker_addresses)
        if len(raw) != len(orders):
            raise RelayerApiError(f"Expected info for {len(orders)} orders, got {len(raw)}")
        return [self._parse(item) for item in raw]

    def _parse(self, item: Dict[str, Any]) -> OrderAndTraderInfo:
        order_info = item.get("orderInfo", {})
        trader_info = item.get("traderInfo", {})
        return OrderAndTraderInfo(
            order_info=OrderInfo(
                order_status=OrderStatus(int(order_info.get("orderStatus", OrderStatus.INVALID))),
                order_hash=order_info.get("orderHash", ""),
                order_taker_asset_filled_amount=int(order_info.get("orderTakerAssetFilledAmount", 0)),
            ),
            trader_info=TraderInfo(
                maker_balance=int(trader_info.get("makerBalance", 0)),
                maker_fee_balance=int(trader_info.get("makerFeeBalance", 0)),
            ),
        )
