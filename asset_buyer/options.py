"""Option dataclasses for AssetBuyer construction and requests."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from asset_buyer.constants import (
    DEFAULT_EXPIRY_BUFFER_SECONDS,
    DEFAULT_NETWORK_ID,
    DEFAULT_ORDER_REFRESH_INTERVAL_MS,
    DEFAULT_SHOULD_FORCE_ORDER_REFRESH,
    DEFAULT_SLIPPAGE_PERCENTAGE,
)


@dataclass(frozen=True)
class AssetBuyerOpts:
    """
    network_id: pycardano Network value the orders live on.
    order_refresh_interval_ms: how long fetched orders are served from cache.
    expiry_buffer_seconds: orders expiring within this many seconds are treated as unfillable.
    fee_token_asset_data: overrides the network's well-known fee token.
    """
    network_id: int = DEFAULT_NETWORK_ID
    order_refresh_interval_ms: int = DEFAULT_ORDER_REFRESH_INTERVAL_MS
    expiry_buffer_seconds: int = DEFAULT_EXPIRY_BUFFER_SECONDS
    fee_token_asset_data: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "AssetBuyerOpts":
        return cls(
            network_id=settings.network_id,
            order_refresh_interval_ms=settings.order_refresh_interval_ms,
            expiry_buffer_seconds=settings.expiry_buffer_seconds,
        )


@dataclass(frozen=True)
class BuyQuoteRequestOpts:
    should_force_order_refresh: bool = DEFAULT_SHOULD_FORCE_ORDER_REFRESH
    slippage_percentage: Decimal = field(default=DEFAULT_SLIPPAGE_PERCENTAGE)


@dataclass(frozen=True)
class LiquidityRequestOpts:
    should_force_order_refresh: bool = DEFAULT_SHOULD_FORCE_ORDER_REFRESH
