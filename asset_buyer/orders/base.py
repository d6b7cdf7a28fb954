"""Signed order record, its wire form and order hash."""

import time
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Optional

from pycardano import Address, PlutusData

from asset_buyer.asset_data import from_hex, normalize_asset_data
from asset_buyer.orders.schema import validate_order_dict


# Datum structure used for hashing
@dataclass
class OrderDatum(PlutusData):
    """Order fields as signed by the maker."""
    maker_address: bytes
    taker_address: bytes
    fee_recipient_address: bytes
    maker_asset_data: bytes
    taker_asset_data: bytes
    maker_asset_amount: int
    taker_asset_amount: int
    maker_fee: int
    taker_fee: int
    expiration_time_seconds: int
    salt: int
    CONSTR_ID: ClassVar[int] = 0


def _address_bytes(address: str) -> bytes:
    return Address.decode(address).to_primitive() if address else b""


@dataclass(frozen=True)
class Order:
    """
    A signed limit order: the maker sells maker_asset_amount of maker_asset_data
    for taker_asset_amount of taker_asset_data.

    Fees are paid in the network fee token. An empty taker_address means anyone may fill.
    remaining_fillable_maker_asset_amount is what the order provider reports, if anything.
    """
    maker_address: str
    taker_address: str
    fee_recipient_address: str
    maker_asset_data: str
    taker_asset_data: str
    maker_asset_amount: int
    taker_asset_amount: int
    maker_fee: int
    taker_fee: int
    expiration_time_seconds: int
    salt: int
    signature: str
    remaining_fillable_maker_asset_amount: Optional[int] = None

    def to_datum(self) -> OrderDatum:
        return OrderDatum(
            maker_address=_address_bytes(self.maker_address),
            taker_address=_address_bytes(self.taker_address),
            fee_recipient_address=_address_bytes(self.fee_recipient_address),
            maker_asset_data=from_hex(self.maker_asset_data),
            taker_asset_data=from_hex(self.taker_asset_data),
            maker_asset_amount=self.maker_asset_amount,
            taker_asset_amount=self.taker_asset_amount,
            maker_fee=self.maker_fee,
            taker_fee=self.taker_fee,
            expiration_time_seconds=self.expiration_time_seconds,
            salt=self.salt,
        )

    def hash_hex(self) -> str:
        """blake2b-256 datum hash of the signed fields."""
        return self.to_datum().hash().payload.hex()

    def with_remaining_fillable(self, amount: Optional[int]) -> "Order":
        return replace(self, remaining_fillable_maker_asset_amount=amount)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        """Build from the camelCase wire form. Raises InvalidOrderError if it does not validate."""
        validate_order_dict(data)
        remaining = data.get("remainingFillableMakerAssetAmount")
        return cls(
            maker_address=data["makerAddress"],
            taker_address=data.get("takerAddress", ""),
            fee_recipient_address=data["feeRecipientAddress"],
            maker_asset_data=normalize_asset_data(data["makerAssetData"]),
            taker_asset_data=normalize_asset_data(data["takerAssetData"]),
            maker_asset_amount=int(data["makerAssetAmount"]),
            taker_asset_amount=int(data["takerAssetAmount"]),
            maker_fee=int(data["makerFee"]),
            taker_fee=int(data["takerFee"]),
            expiration_time_seconds=int(data["expirationTimeSeconds"]),
            salt=int(data["salt"]),
            signature=data["signature"],
            remaining_fillable_maker_asset_amount=int(remaining) if remaining is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "makerAddress": self.maker_address,
            "takerAddress": self.taker_address,
            "feeRecipientAddress": self.fee_recipient_address,
            "makerAssetData": self.maker_asset_data,
            "takerAssetData": self.taker_asset_data,
            "makerAssetAmount": str(self.maker_asset_amount),
            "takerAssetAmount": str(self.taker_asset_amount),
            "makerFee": str(self.maker_fee),
            "takerFee": str(self.taker_fee),
            "expirationTimeSeconds": str(self.expiration_time_seconds),
            "salt": str(self.salt),
            "signature": self.signature,
        }
        if self.remaining_fillable_maker_asset_amount is not None:
            data["remainingFillableMakerAssetAmount"] = str(self.remaining_fillable_maker_asset_amount)
        return data

    def __repr__(self) -> str:
        return f"Order({self.maker_asset_amount} → {self.taker_asset_amount}, fee={self.taker_fee})"


def is_open_order(order: Order) -> bool:
    return order.taker_address == ""


def will_order_expire(order: Order, seconds_from_now: int, now: Optional[float] = None) -> bool:
    """True if the order expires within seconds_from_now."""
    now = time.time() if now is None else now
    return order.expiration_time_seconds < int(now) + seconds_from_now
