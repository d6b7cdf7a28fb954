"""Defaults and well-known values."""

from decimal import Decimal
from typing import Dict

from pycardano import Network

from asset_buyer.types import Token

# AssetBuyer defaults
DEFAULT_NETWORK_ID = Network.MAINNET.value
DEFAULT_ORDER_REFRESH_INTERVAL_MS = 10_000  # 10 seconds
DEFAULT_EXPIRY_BUFFER_SECONDS = 120  # 2 minutes

# Request defaults
DEFAULT_SHOULD_FORCE_ORDER_REFRESH = False
DEFAULT_SLIPPAGE_PERCENTAGE = Decimal("0.2")  # 20%

# Relayer
MAX_PER_PAGE = 1000
DEFAULT_REQUEST_TIMEOUT = 30.0
MAX_MESSAGE_SIZE = 50 * 1024 * 1024  # large orderbook responses

# Fee token (protocol fees are paid in it) by network id
FEE_TOKENS: Dict[int, Token] = {
    Network.MAINNET.value: Token(
        policy_id="29d222ce763455e3d7a09a665ce554f00ac89d2e99a1a83d267170c6",
        name="4d494e",  # MIN
    ),
    Network.TESTNET.value: Token(
        policy_id="e16c2dc8ae937e8d3790c7fd7168d7b994621ba14ca11415f39fed72",
        name="4d494e",
    ),
}

ONE_MILLION = 1_000_000  # operator share denominator (ppm)
