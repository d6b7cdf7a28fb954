"""Shared order and asset fixtures for the test suite."""

import asyncio
import itertools
from typing import Optional

from pycardano import Network

from asset_buyer import ADA, Order, Token, encode_asset_data
from asset_buyer.constants import FEE_TOKENS

# Minswap V1 order contract, a real mainnet address
MAKER_ADDRESS = "addr1zxn9efv2f6w82hagxqtn62ju4m293tqvw0uhmdl64ch8uw6j2c79gy9l76sdg0xwhd7r0c0kna0tycz4y5s6mlenh8pq6s3z70"

TOKEN_A = Token(policy_id="a1" * 28, name="544f4b454e41")  # TOKENA
TOKEN_B = Token(policy_id="b2" * 28, name="544f4b454e42")  # TOKENB
FEE_TOKEN = FEE_TOKENS[Network.MAINNET.value]

TOKEN_A_DATA = encode_asset_data(TOKEN_A)
TOKEN_B_DATA = encode_asset_data(TOKEN_B)
ADA_DATA = encode_asset_data(ADA)
FEE_DATA = encode_asset_data(FEE_TOKEN)

FAR_FUTURE = 4_000_000_000
NOW = 1_700_000_000

_salts = itertools.count(1)


def run(coro):
    return asyncio.run(coro)


def make_order(
    maker_asset_amount: int,
    taker_asset_amount: int,
    maker_asset_data: str = TOKEN_A_DATA,
    taker_asset_data: str = ADA_DATA,
    taker_fee: int = 0,
    maker_fee: int = 0,
    expiration_time_seconds: int = FAR_FUTURE,
    taker_address: str = "",
    remaining_fillable: Optional[int] = None,
) -> Order:
    return Order(
        maker_address=MAKER_ADDRESS,
        taker_address=taker_address,
        fee_recipient_address=MAKER_ADDRESS,
        maker_asset_data=maker_asset_data,
        taker_asset_data=taker_asset_data,
        maker_asset_amount=maker_asset_amount,
        taker_asset_amount=taker_asset_amount,
        maker_fee=maker_fee,
        taker_fee=taker_fee,
        expiration_time_seconds=expiration_time_seconds,
        salt=next(_salts),
        signature="ab" * 64,
        remaining_fillable_maker_asset_amount=remaining_fillable,
    )
