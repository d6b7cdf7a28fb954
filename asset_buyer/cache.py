"""
Time-windowed cache of orders keyed by maker/taker asset pair.

Entries are replaced wholesale on refresh and never evicted. There is no lock:
two concurrent misses for one key may both fetch, and the later store wins.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from asset_buyer.types import OrdersAndFillableAmounts


def wall_clock_ms() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class CacheEntry:
    orders_and_fillable_amounts: OrdersAndFillableAmounts
    last_refresh_ms: float


class OrderCache:
    """An entry is fresh while now - last_refresh_ms < refresh_interval_ms."""

    def __init__(self, refresh_interval_ms: int, clock: Optional[Callable[[], float]] = None):
        self.refresh_interval_ms = refresh_interval_ms
        self.clock = clock or wall_clock_ms
        self._entries: Dict[str, CacheEntry] = {}

    @staticmethod
    def key_for(maker_asset_data: str, taker_asset_data: str) -> str:
        # asset data is hex, so "_" never appears inside either half
        return f"{maker_asset_data}_{taker_asset_data}"

    def get(self, maker_asset_data: str, taker_asset_data: str) -> Optional[CacheEntry]:
        return self._entries.get(self.key_for(maker_asset_data, taker_asset_data))

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self.clock() - entry.last_refresh_ms < self.refresh_interval_ms

    def get_fresh(self, maker_asset_data: str, taker_asset_data: str) -> Optional[OrdersAndFillableAmounts]:
        """Cached orders if present and fresh, else None."""
        entry = self.get(maker_asset_data, taker_asset_data)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry.orders_and_fillable_amounts

    def set(
        self, maker_asset_data: str, taker_asset_data: str, orders_and_fillable_amounts: OrdersAndFillableAmounts,
    ) -> CacheEntry:
        entry = CacheEntry(orders_and_fillable_amounts=orders_and_fillable_amounts, last_refresh_ms=self.clock())
        self._entries[self.key_for(maker_asset_data, taker_asset_data)] = entry
        return entry

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
