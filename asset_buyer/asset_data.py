"""
Asset data encoding.

Asset data is the hex CBOR of an AssetClassDatum (policy id + asset name), the
same shape DEX contracts use on chain for a token.
"""

from dataclasses import dataclass
from typing import ClassVar

from pycardano import PlutusData

from asset_buyer.errors import AssetDataDecodeError
from asset_buyer.types import Token

POLICY_ID_SIZE = 28
MAX_ASSET_NAME_SIZE = 32


def from_hex(hex_string: str) -> bytes:
    """Convert hex string to bytes. Returns empty bytes for empty/None input."""
    return bytes.fromhex(hex_string) if hex_string else b""


@dataclass
class AssetClassDatum(PlutusData):
    """On-chain token (policy ID + asset name). Empty bytes for ADA."""
    policy_id: bytes
    asset_name: bytes
    CONSTR_ID: ClassVar[int] = 0


def encode_asset_data(token: Token) -> str:
    datum = AssetClassDatum(policy_id=from_hex(token.policy_id), asset_name=from_hex(token.name))
    return datum.to_cbor_hex()


def decode_asset_data(asset_data: str) -> Token:
    """Decode asset data into a Token. Raises AssetDataDecodeError on anything malformed."""
    if not isinstance(asset_data, str) or not asset_data:
        raise AssetDataDecodeError(f"Asset data must be a non-empty hex string, got {asset_data!r}")
    try:
        datum = AssetClassDatum.from_cbor(bytes.fromhex(asset_data))
    except Exception as e:
        raise AssetDataDecodeError(f"Could not decode asset data {asset_data[:32]}: {e}") from e

    policy_id, asset_name = datum.policy_id, datum.asset_name
    if not isinstance(policy_id, bytes) or not isinstance(asset_name, bytes):
        raise AssetDataDecodeError(f"Asset data fields must be bytes: {asset_data[:32]}")
    if len(policy_id) not in (0, POLICY_ID_SIZE):
        raise AssetDataDecodeError(f"Policy id must be {POLICY_ID_SIZE} bytes, got {len(policy_id)}")
    if len(asset_name) > MAX_ASSET_NAME_SIZE:
        raise AssetDataDecodeError(f"Asset name exceeds {MAX_ASSET_NAME_SIZE} bytes")
    if not policy_id and asset_name:
        raise AssetDataDecodeError("ADA cannot carry an asset name")
    return Token(policy_id=policy_id.hex(), name=asset_name.hex())


def is_valid_asset_data(asset_data: str) -> bool:
    try:
        decode_asset_data(asset_data)
    except AssetDataDecodeError:
        return False
    return True


def normalize_asset_data(asset_data: str) -> str:
    """Validate asset data and return it in canonical form (lowercase hex, no whitespace)."""
    decode_asset_data(asset_data)
    return "".join(asset_data.split()).lower()
