"""Signed order schema check for the camelCase wire form."""

from typing import Any, Dict, List

from pycardano import Address

from asset_buyer.asset_data import decode_asset_data
from asset_buyer.errors import AssetDataDecodeError, InvalidOrderError

ADDRESS_FIELDS = ["makerAddress", "feeRecipientAddress"]
ASSET_DATA_FIELDS = ["makerAssetData", "takerAssetData"]
POSITIVE_AMOUNT_FIELDS = ["makerAssetAmount", "takerAssetAmount"]
AMOUNT_FIELDS = ["makerFee", "takerFee", "expirationTimeSeconds", "salt"]
REQUIRED_FIELDS = ADDRESS_FIELDS + ASSET_DATA_FIELDS + POSITIVE_AMOUNT_FIELDS + AMOUNT_FIELDS + ["signature"]


def _parse_amount(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidOrderError(f"{name} must be an integer amount, got {value!r}")
    if isinstance(value, int):
        amount = value
    elif isinstance(value, str) and value.isdigit():
        amount = int(value)
    else:
        raise InvalidOrderError(f"{name} must be an integer amount, got {value!r}")
    if amount < 0:
        raise InvalidOrderError(f"{name} must not be negative")
    return amount


def _check_address(name: str, value: Any):
    if not isinstance(value, str):
        raise InvalidOrderError(f"{name} must be a bech32 address string")
    try:
        Address.decode(value)
    except Exception as e:
        raise InvalidOrderError(f"{name} is not a valid address: {value[:24]}") from e


def _check_hex(name: str, value: Any):
    if not isinstance(value, str) or not value:
        raise InvalidOrderError(f"{name} must be a non-empty hex string")
    try:
        bytes.fromhex(value)
    except ValueError as e:
        raise InvalidOrderError(f"{name} is not hex") from e


def validate_order_dict(data: Dict[str, Any]):
    """Raise InvalidOrderError unless data is a well-formed signed order."""
    if not isinstance(data, dict):
        raise InvalidOrderError(f"Order must be an object, got {type(data).__name__}")

    missing = [f for f in REQUIRED_FIELDS if f not in data]
    if missing:
        raise InvalidOrderError(f"Order is missing fields: {', '.join(missing)}")

    for name in ADDRESS_FIELDS:
        _check_address(name, data[name])
    if data.get("takerAddress"):
        _check_address("takerAddress", data["takerAddress"])

    for name in ASSET_DATA_FIELDS:
        try:
            decode_asset_data(data[name])
        except AssetDataDecodeError as e:
            raise InvalidOrderError(f"{name}: {e}") from e

    for name in POSITIVE_AMOUNT_FIELDS:
        if _parse_amount(name, data[name]) == 0:
            raise InvalidOrderError(f"{name} must be positive")
    for name in AMOUNT_FIELDS:
        _parse_amount(name, data[name])
    if data.get("remainingFillableMakerAssetAmount") is not None:
        _parse_amount("remainingFillableMakerAssetAmount", data["remainingFillableMakerAssetAmount"])

    _check_hex("signature", data["signature"])


def validate_order_dicts(orders: List[Dict[str, Any]]):
    if not isinstance(orders, list):
        raise InvalidOrderError("Orders must be a list")
    for i, order in enumerate(orders):
        try:
            validate_order_dict(order)
        except InvalidOrderError as e:
            raise InvalidOrderError(f"orders[{i}]: {e}") from e
