"""Order provider serving a fixed list of orders."""

from dataclasses import replace
from typing import List, Sequence

from asset_buyer.asset_data import normalize_asset_data
from asset_buyer.orders import Order, validate_order_dicts
from .base import OrderProviderRequest, OrderProviderResponse


class BasicOrderProvider:
    """Serves orders passed in at construction; never touches the network."""

    def __init__(self, orders: Sequence[Order] = ()):
        validate_order_dicts([o.to_dict() for o in orders])
        self.orders: List[Order] = [
            replace(
                o,
                maker_asset_data=normalize_asset_data(o.maker_asset_data),
                taker_asset_data=normalize_asset_data(o.taker_asset_data),
            )
            for o in orders
        ]

    async def get_orders(self, request: OrderProviderRequest) -> OrderProviderResponse:
        return OrderProviderResponse(orders=[
            o for o in self.orders
            if o.maker_asset_data == request.maker_asset_data and o.taker_asset_data == request.taker_asset_data
        ])

    async def get_available_maker_asset_datas(self, taker_asset_data: str) -> List[str]:
        return _unique(o.maker_asset_data for o in self.orders if o.taker_asset_data == taker_asset_data)

    async def get_available_taker_asset_datas(self, maker_asset_data: str) -> List[str]:
        return _unique(o.taker_asset_data for o in self.orders if o.maker_asset_data == maker_asset_data)


def _unique(values) -> List[str]:
    return list(dict.fromkeys(values))
