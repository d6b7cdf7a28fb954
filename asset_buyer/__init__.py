"""
Asset buyer: order sourcing and buy quotes for Cardano DEX orders.

Structure:
    asset_buyer/
    ├── types.py              # Token, OrdersAndFillableAmounts, BuyQuote
    ├── asset_data.py         # Asset data encoding (Plutus datum CBOR)
    ├── orders/               # Signed orders, schema, fill arithmetic
    ├── providers/            # Order providers and validators
    ├── relayer/              # Relayer WebSocket client
    ├── cache.py              # Order cache
    ├── response_processor.py # Provider response validation and fillable amounts
    ├── quote_calculator.py   # Buy quotes
    ├── liquidity.py          # Liquidity estimates
    ├── buyer.py              # AssetBuyer
    └── simulation/           # Staking pool fuzz simulation

Usage:
    from asset_buyer import AssetBuyer, Token, encode_asset_data
    from asset_buyer.providers import BasicOrderProvider
    from asset_buyer.simulation import PoolManagementSimulation
"""

from .types import (
    ADA, EMPTY_ORDERS_AND_FILLABLE_AMOUNTS, Asset, BuyQuote, BuyQuoteInfo, LiquidityForAssetData,
    OrdersAndFillableAmounts, Token,
)
from .errors import (
    AssetBuyerError, AssetDataDecodeError, AssetUnavailableError, FeeTokenUnavailableError,
    InsufficientAssetLiquidityError, InsufficientFeeTokenLiquidityError, InvalidInputError,
    InvalidOrderError, InvalidOrderProviderResponseError, RelayerApiError, RelayerError,
)
from .options import AssetBuyerOpts, BuyQuoteRequestOpts, LiquidityRequestOpts
from .asset_data import decode_asset_data, encode_asset_data, is_valid_asset_data, normalize_asset_data
from .orders import Order
from .liquidity import calculate_liquidity
from .quote_calculator import calculate_buy_quote
from .buyer import AssetBuyer

__all__ = [
    # Types
    "Token", "Asset", "ADA", "Order",
    "OrdersAndFillableAmounts", "EMPTY_ORDERS_AND_FILLABLE_AMOUNTS",
    "BuyQuote", "BuyQuoteInfo", "LiquidityForAssetData",
    "AssetBuyerOpts", "BuyQuoteRequestOpts", "LiquidityRequestOpts",
    # Errors
    "AssetBuyerError", "AssetDataDecodeError", "AssetUnavailableError", "FeeTokenUnavailableError",
    "InsufficientAssetLiquidityError", "InsufficientFeeTokenLiquidityError", "InvalidInputError",
    "InvalidOrderError", "InvalidOrderProviderResponseError", "RelayerApiError", "RelayerError",
    # Functions
    "encode_asset_data", "decode_asset_data", "is_valid_asset_data", "normalize_asset_data",
    "calculate_liquidity", "calculate_buy_quote",
    "AssetBuyer",
]
