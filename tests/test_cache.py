"""Tests for the order cache and AssetBuyer's refresh behaviour."""

from unittest.mock import AsyncMock

import pytest

from asset_buyer import AssetBuyer, AssetBuyerOpts, OrdersAndFillableAmounts
from asset_buyer.cache import OrderCache
from asset_buyer.errors import RelayerApiError
from asset_buyer.providers import BasicOrderProvider
from factories import ADA_DATA, TOKEN_A_DATA, TOKEN_B_DATA, make_order, run


class FakeClock:
    def __init__(self, now_ms: float = 1_000_000):
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float):
        self.now_ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider():
    provider = BasicOrderProvider([make_order(100, 200), make_order(50, 100, maker_asset_data=TOKEN_B_DATA)])
    provider.get_orders = AsyncMock(wraps=provider.get_orders)
    return provider


@pytest.fixture
def buyer(provider, clock):
    return AssetBuyer(provider, options=AssetBuyerOpts(order_refresh_interval_ms=1000), clock=clock)


# =========================================================
# OrderCache
# =========================================================


def test_key_joins_maker_and_taker(clock):
    assert OrderCache.key_for("aa", "bb") == "aa_bb"
    cache = OrderCache(1000, clock=clock)
    cache.set("aa", "bb", OrdersAndFillableAmounts())
    assert "aa_bb" in cache
    assert len(cache) == 1


def test_entry_is_fresh_strictly_within_interval(clock):
    cache = OrderCache(1000, clock=clock)
    orders = OrdersAndFillableAmounts.from_pairs([(make_order(1, 1), 1)])
    entry = cache.set("aa", "bb", orders)
    assert entry.last_refresh_ms == clock.now_ms

    clock.advance(999)
    assert cache.get_fresh("aa", "bb") is orders
    clock.advance(1)
    assert cache.get_fresh("aa", "bb") is None
    assert cache.get("aa", "bb") is entry


def test_zero_interval_is_never_fresh(clock):
    cache = OrderCache(0, clock=clock)
    cache.set("aa", "bb", OrdersAndFillableAmounts())
    assert cache.get_fresh("aa", "bb") is None


def test_missing_entry():
    assert OrderCache(1000).get_fresh("aa", "bb") is None


# =========================================================
# AssetBuyer refresh
# =========================================================


def test_fresh_entry_is_served_without_fetching(buyer, provider, clock):
    first = run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA))
    clock.advance(999)
    second = run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA))

    assert provider.get_orders.await_count == 1
    assert second is first
    assert second.remaining_fillable_maker_asset_amounts == (100,)


def test_stale_entry_is_refetched_once(buyer, provider, clock):
    run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA))
    clock.advance(1000)
    run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA))

    assert provider.get_orders.await_count == 2
    assert buyer._cache.get(TOKEN_A_DATA, ADA_DATA).last_refresh_ms == clock.now_ms


def test_forced_refresh_bypasses_fresh_entry(buyer, provider):
    run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA))
    run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA, should_force_order_refresh=True))
    assert provider.get_orders.await_count == 2


def test_pairs_are_cached_separately(buyer, provider):
    a = run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA))
    b = run(buyer.get_orders_and_fillable_amounts(TOKEN_B_DATA, ADA_DATA))
    assert provider.get_orders.await_count == 2
    assert a.orders[0].maker_asset_data == TOKEN_A_DATA
    assert b.orders[0].maker_asset_data == TOKEN_B_DATA


def test_failed_fetch_leaves_entry_untouched(buyer, provider, clock):
    run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA))
    entry = buyer._cache.get(TOKEN_A_DATA, ADA_DATA)

    clock.advance(5000)
    provider.get_orders.side_effect = RelayerApiError("relayer down")
    with pytest.raises(RelayerApiError):
        run(buyer.get_orders_and_fillable_amounts(TOKEN_A_DATA, ADA_DATA))

    assert buyer._cache.get(TOKEN_A_DATA, ADA_DATA) is entry


def test_empty_result_is_cached(provider, clock):
    buyer = AssetBuyer(provider, options=AssetBuyerOpts(order_refresh_interval_ms=1000), clock=clock)
    orders = run(buyer.get_orders_and_fillable_amounts(ADA_DATA, TOKEN_A_DATA))
    run(buyer.get_orders_and_fillable_amounts(ADA_DATA, TOKEN_A_DATA))
    assert len(orders) == 0
    assert provider.get_orders.await_count == 1
