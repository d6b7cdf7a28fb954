"""Order provider and order validator protocols."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Protocol, runtime_checkable

from asset_buyer.orders import Order


@dataclass(frozen=True)
class OrderProviderRequest:
    maker_asset_data: str
    taker_asset_data: str
    network_id: int


@dataclass(frozen=True)
class OrderProviderResponse:
    orders: List[Order] = field(default_factory=list)


@runtime_checkable
class OrderProvider(Protocol):
    """
    Interface for order sources (a fixed list, a remote relayer, ...).

    get_orders must only return orders for the requested maker/taker pair;
    callers verify this.
    """

    async def get_orders(self, request: OrderProviderRequest) -> OrderProviderResponse:
        """Fetch orders for one maker/taker pair."""
        ...

    async def get_available_maker_asset_datas(self, taker_asset_data: str) -> List[str]:
        """Maker asset datas that can be bought with taker_asset_data."""
        ...

    async def get_available_taker_asset_datas(self, maker_asset_data: str) -> List[str]:
        """Taker asset datas that can be used to buy maker_asset_data."""
        ...


class OrderStatus(IntEnum):
    INVALID = 0
    INVALID_MAKER_ASSET_AMOUNT = 1
    INVALID_TAKER_ASSET_AMOUNT = 2
    FILLABLE = 3
    EXPIRED = 4
    FULLY_FILLED = 5
    CANCELLED = 6


@dataclass(frozen=True)
class OrderInfo:
    order_status: OrderStatus
    order_hash: str
    order_taker_asset_filled_amount: int


@dataclass(frozen=True)
class TraderInfo:
    """Maker balances that can be moved to fill an order."""
    maker_balance: int
    maker_fee_balance: int


@dataclass(frozen=True)
class OrderAndTraderInfo:
    order_info: OrderInfo
    trader_info: TraderInfo


class OrderValidator(Protocol):
    """On-chain order state lookup, used to refine provider-reported fillable amounts."""

    async def get_orders_and_traders_info(
        self, orders: List[Order], taker_addresses: List[str],
    ) -> List[OrderAndTraderInfo]:
        """One result per order, in the same order."""
        ...
