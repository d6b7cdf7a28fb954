#!/usr/bin/env python3
"""
Asset Buyer - Relayer Quote

Connects to the configured relayer, lists what the taker asset can buy and
prints a buy quote.

Usage:
    python main.py --maker <policy_id+name hex> --amount 1000000
    python main.py --maker-asset-data <cbor hex> --taker-asset-data <cbor hex> --amount 500
"""

import argparse
import asyncio
import logging
import sys

from asset_buyer import (
    ADA, Asset, AssetBuyer, AssetBuyerError, AssetBuyerOpts, BuyQuoteRequestOpts, Token,
    decode_asset_data, encode_asset_data,
)
from config import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quote a purchase against the configured relayer")
    maker = parser.add_mutually_exclusive_group(required=True)
    maker.add_argument("--maker", help="Token to buy as policy_id + asset name hex")
    maker.add_argument("--maker-asset-data", help="Token to buy as encoded asset data")
    taker = parser.add_mutually_exclusive_group()
    taker.add_argument("--taker", help="Token to pay with as policy_id + asset name hex (default: ADA)")
    taker.add_argument("--taker-asset-data", help="Token to pay with as encoded asset data")
    parser.add_argument("--amount", type=int, required=True, help="Maker amount to buy, in base units")
    parser.add_argument("--force-refresh", action="store_true", help="Bypass the order cache")
    return parser.parse_args(argv)


def resolve_asset_data(token_hex, asset_data, default: Token = ADA) -> str:
    if asset_data:
        return asset_data
    return encode_asset_data(Token.from_hex(token_hex) if token_hex else default)


async def run_quote(args: argparse.Namespace) -> bool:
    maker_asset_data = resolve_asset_data(args.maker, args.maker_asset_data)
    taker_asset_data = resolve_asset_data(args.taker, args.taker_asset_data)

    print("=" * 60)
    print("Asset Buyer - Relayer Quote")
    print("=" * 60)
    print()
    print(f"Relayer URL: {settings.relayer_url}")
    print()

    buyer = AssetBuyer.for_relayer_url(
        settings.relayer_url,
        options=AssetBuyerOpts.from_settings(settings),
        username=settings.relayer_username,
        password=settings.relayer_password,
        timeout=settings.request_timeout,
    )
    try:
        maker_token = decode_asset_data(maker_asset_data)
        taker_token = decode_asset_data(taker_asset_data)

        print(f"[1/2] Assets buyable with {taker_token}...")
        available = await buyer.get_available_maker_asset_datas(taker_asset_data)
        for asset_data in available:
            print(f"   {decode_asset_data(asset_data)}")
        print(f"✅ {len(available)} assets available")

        print()
        print(f"[2/2] Quoting {Asset(args.amount, maker_token)}...")
        quote = await buyer.get_buy_quote(
            maker_asset_data,
            taker_asset_data,
            args.amount,
            BuyQuoteRequestOpts(
                should_force_order_refresh=args.force_refresh or settings.should_force_order_refresh,
                slippage_percentage=settings.slippage_percentage,
            ),
        )
        best, worst = quote.best_case_quote_info, quote.worst_case_quote_info
        print(f"✅ {len(quote.orders)} orders, {len(quote.fee_orders)} fee orders")
        print(f"   Best case:  {Asset(best.total_taker_asset_amount, taker_token)} "
              f"(fees {best.fee_taker_asset_amount})")
        print(f"   Worst case: {Asset(worst.total_taker_asset_amount, taker_token)} "
              f"(slippage {quote.slippage_percentage:.0%})")
        return True

    except AssetBuyerError as e:
        print(f"❌ {type(e).__name__}: {e}")
        return False

    finally:
        await buyer.close()


async def main():
    """Main entry point"""
    args = parse_args()
    try:
        success = await run_quote(args)
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
