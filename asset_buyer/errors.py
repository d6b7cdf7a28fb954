"""Exceptions raised by the asset buyer."""

from typing import List


class AssetBuyerError(Exception):
    """Base exception for asset buyer errors."""


# Input validation
class InvalidInputError(AssetBuyerError, ValueError):
    """An argument failed validation before any I/O was attempted."""

class AssetDataDecodeError(InvalidInputError):
    """Asset data is not a valid encoded asset identifier."""

class InvalidOrderError(InvalidInputError):
    """An order does not conform to the signed order schema."""


# Provider contract
class InvalidOrderProviderResponseError(AssetBuyerError):
    """The order provider returned orders for a pair other than the one requested."""

    def __init__(self, message: str, offending_order_hashes: List[str] = ()):
        super().__init__(message)
        self.offending_order_hashes = list(offending_order_hashes)


# Liquidity
class AssetUnavailableError(AssetBuyerError):
    """No orders exist for the requested pair."""

class InsufficientAssetLiquidityError(AssetBuyerError):
    """Fillable volume does not cover the requested buy amount."""

    def __init__(self, amount_available_to_fill: int):
        super().__init__(f"Insufficient asset liquidity: only {amount_available_to_fill} available to fill")
        self.amount_available_to_fill = amount_available_to_fill

class InsufficientFeeTokenLiquidityError(AssetBuyerError):
    """Fee orders do not cover the fees owed by the selected orders."""


# Configuration
class FeeTokenUnavailableError(AssetBuyerError):
    """No fee token is known for the configured network."""


# Remote relayer
class RelayerError(AssetBuyerError):
    """Base exception for relayer client errors."""

class RelayerConnectionError(RelayerError):
    """Connection-related errors."""

class RelayerQueryError(RelayerError):
    """Query-related errors."""

class RelayerApiError(RelayerError):
    """A relayer call made on behalf of an order provider failed."""
