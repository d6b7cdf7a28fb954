"""Tests for signed orders: schema, hashing, expiry and fill arithmetic."""

import pytest

from asset_buyer import InvalidOrderError, Order
from asset_buyer.orders import (
    ceil_div,
    compute_remaining_fillable,
    get_maker_fill_amount,
    get_net_fee_token_amount,
    get_taker_fee_amount,
    get_taker_fill_amount,
    get_taker_fill_amount_for_fee_order,
    is_open_order,
    validate_order_dicts,
    will_order_expire,
)
from factories import MAKER_ADDRESS, NOW, make_order


# =========================================================
# Schema
# =========================================================


def test_wire_form_parses_back_to_the_same_order():
    order = make_order(100, 200, taker_fee=3, remaining_fillable=40)
    assert Order.from_dict(order.to_dict()) == order


def test_wire_form_accepts_integer_amounts():
    data = make_order(100, 200).to_dict()
    data["makerAssetAmount"] = 100
    assert Order.from_dict(data).maker_asset_amount == 100


def test_missing_fields_are_reported():
    data = make_order(100, 200).to_dict()
    del data["salt"]
    del data["signature"]
    with pytest.raises(InvalidOrderError, match="salt, signature"):
        Order.from_dict(data)


@pytest.mark.parametrize("field,value", [
    ("makerAssetAmount", "0"),
    ("takerAssetAmount", "-5"),
    ("takerFee", "1.5"),
    ("salt", True),
    ("makerAddress", "addr1notanaddress"),
    ("takerAddress", "nope"),
    ("makerAssetData", "zz"),
    ("signature", "xyz"),
    ("signature", ""),
])
def test_invalid_fields_are_rejected(field, value):
    data = make_order(100, 200).to_dict()
    data[field] = value
    with pytest.raises(InvalidOrderError):
        Order.from_dict(data)


def test_validate_order_dicts_reports_the_failing_index():
    good = make_order(100, 200).to_dict()
    bad = dict(good, takerAssetAmount="0")
    with pytest.raises(InvalidOrderError, match=r"orders\[1\]"):
        validate_order_dicts([good, bad])


def test_validate_order_dicts_requires_a_list():
    with pytest.raises(InvalidOrderError):
        validate_order_dicts(make_order(100, 200).to_dict())


# =========================================================
# Hash and status
# =========================================================


def test_hash_is_stable_blake2b_hex():
    order = make_order(100, 200)
    assert order.hash_hex() == order.hash_hex()
    assert len(order.hash_hex()) == 64
    int(order.hash_hex(), 16)


def test_hash_covers_salt_but_not_fillable_amount():
    a = make_order(100, 200)
    b = make_order(100, 200)
    assert a.hash_hex() != b.hash_hex()
    assert a.with_remaining_fillable(10).hash_hex() == a.hash_hex()


def test_open_order_has_no_taker():
    assert is_open_order(make_order(1, 1))
    assert not is_open_order(make_order(1, 1, taker_address=MAKER_ADDRESS))


def test_expiry_is_strict_against_buffer():
    assert will_order_expire(make_order(1, 1, expiration_time_seconds=NOW + 119), 120, now=NOW)
    assert not will_order_expire(make_order(1, 1, expiration_time_seconds=NOW + 120), 120, now=NOW)
    assert not will_order_expire(make_order(1, 1, expiration_time_seconds=NOW + 120), 120, now=NOW + 0.9)


# =========================================================
# Fill arithmetic
# =========================================================


def test_ceil_div():
    assert ceil_div(10, 3) == 4
    assert ceil_div(9, 3) == 3
    assert ceil_div(0, 3) == 0


def test_rates_round_in_makers_favour():
    order = make_order(3, 10)
    assert get_taker_fill_amount(order, 1) == 4
    assert get_maker_fill_amount(order, 4) == 1
    assert get_maker_fill_amount(order, 3) == 0


def test_taker_fee_rounds_down():
    order = make_order(100, 10, taker_fee=3)
    assert get_taker_fee_amount(order, 5) == 1
    assert get_taker_fee_amount(order, 10) == 3


def test_fee_order_fill_covers_its_own_fee():
    order = make_order(50, 25, taker_fee=5)
    taker, gross = get_taker_fill_amount_for_fee_order(order, 10)
    assert taker == 6
    assert gross == 12
    assert gross - get_taker_fee_amount(order, taker) >= 10


def test_fee_order_charging_its_whole_amount_is_rejected():
    with pytest.raises(ValueError):
        get_taker_fill_amount_for_fee_order(make_order(5, 5, taker_fee=5), 1)


def test_net_fee_token_amount():
    order = make_order(50, 25, taker_fee=5)
    assert get_net_fee_token_amount(order, 50) == 45
    assert get_net_fee_token_amount(make_order(1, 1, taker_fee=5), 1) == 0


class TestComputeRemainingFillable:
    def test_sufficient_balances_fill_the_rest(self):
        assert compute_remaining_fillable(10, 100, False, 100, 10, 100) == 100

    def test_short_asset_balance_limits_fill(self):
        assert compute_remaining_fillable(10, 100, False, 50, 10, 100) == 50

    def test_short_fee_balance_limits_fill(self):
        assert compute_remaining_fillable(10, 100, False, 100, 4, 100) == 40

    def test_fee_token_asset_shares_one_balance(self):
        assert compute_remaining_fillable(10, 100, True, 55, 55, 100) == 50

    def test_no_fee_is_limited_by_asset_balance_only(self):
        assert compute_remaining_fillable(0, 100, False, 30, 0, 100) == 30

    def test_never_exceeds_remaining_amount(self):
        assert compute_remaining_fillable(0, 100, False, 1000, 0, 20) == 20
