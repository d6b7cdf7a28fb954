"""Order providers and validators."""

from .base import (
    OrderAndTraderInfo, OrderInfo, OrderProvider, OrderProviderRequest, OrderProviderResponse,
    OrderStatus, OrderValidator, TraderInfo,
)
from .basic import BasicOrderProvider
from .relayer import RelayerOrderProvider, RelayerOrderValidator

__all__ = [
    "OrderProvider", "OrderProviderRequest", "OrderProviderResponse",
    "OrderValidator", "OrderStatus", "OrderInfo", "TraderInfo", "OrderAndTraderInfo",
    "BasicOrderProvider", "RelayerOrderProvider", "RelayerOrderValidator",
]
