"""Tests for asset data encoding."""

import pytest

from asset_buyer import ADA, AssetDataDecodeError, InvalidInputError, Token
from asset_buyer.asset_data import decode_asset_data, encode_asset_data, is_valid_asset_data, normalize_asset_data
from factories import ADA_DATA, FEE_DATA, FEE_TOKEN, TOKEN_A, TOKEN_A_DATA


def test_token_decodes_to_itself():
    assert decode_asset_data(TOKEN_A_DATA) == TOKEN_A
    assert decode_asset_data(FEE_DATA) == FEE_TOKEN


def test_ada_has_empty_policy_and_name():
    token = decode_asset_data(ADA_DATA)
    assert token.is_ada
    assert str(token) == "ADA"


def test_distinct_tokens_have_distinct_asset_data():
    assert len({TOKEN_A_DATA, FEE_DATA, ADA_DATA}) == 3


@pytest.mark.parametrize("bad", ["", "zz", "00", "d87980", 123, None])
def test_malformed_asset_data_is_rejected(bad):
    with pytest.raises(AssetDataDecodeError):
        decode_asset_data(bad)
    assert not is_valid_asset_data(bad)


def test_short_policy_id_is_rejected():
    with pytest.raises(AssetDataDecodeError, match="Policy id"):
        decode_asset_data(encode_asset_data(Token(policy_id="ab" * 10, name="")))


def test_long_asset_name_is_rejected():
    with pytest.raises(AssetDataDecodeError, match="Asset name"):
        decode_asset_data(encode_asset_data(Token(policy_id="ab" * 28, name="41" * 33)))


def test_ada_with_name_is_rejected():
    with pytest.raises(AssetDataDecodeError, match="ADA"):
        decode_asset_data(encode_asset_data(Token(policy_id="", name="41")))


def test_decode_error_is_an_input_error():
    assert issubclass(AssetDataDecodeError, InvalidInputError)
    assert issubclass(AssetDataDecodeError, ValueError)


def test_token_from_hex():
    assert Token.from_hex("") == ADA
    assert Token.from_hex("lovelace") == ADA
    assert Token.from_hex(TOKEN_A.to_hex()) == TOKEN_A
    assert Token.from_hex(f"{TOKEN_A.policy_id}.{TOKEN_A.name}") == TOKEN_A


def test_normalize_lowercases_and_strips_whitespace():
    assert normalize_asset_data(TOKEN_A_DATA.upper()) == TOKEN_A_DATA
    assert normalize_asset_data(f" {FEE_DATA[:10]} {FEE_DATA[10:]}\n") == FEE_DATA
    assert normalize_asset_data(ADA_DATA) == ADA_DATA


def test_normalize_rejects_malformed_asset_data():
    with pytest.raises(AssetDataDecodeError):
        normalize_asset_data("zz")
