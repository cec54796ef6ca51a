#!/usr/bin/env python3
"""
Multi-chain wallet analysis tool.
Calls CryptoAnalysisTool.analyze_wallet_multichain() and prints JSON.

Usage (after `pip install -e .`):
    # All supported chains
    python scripts/analyze_wallet.py --address 0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045

    # Selected chains, fetched concurrently
    python scripts/analyze_wallet.py \
        --address 0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045 \
        --chains ethereum base arbitrum --parallel

    # List supported chains
    python scripts/analyze_wallet.py --list-chains
"""

import argparse
import asyncio
import json
import sys

from chainscope.config import Config
from chainscope.tools.crypto.fetcher import CryptoAnalysisTool


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check a wallet's native balance across chains"
    )
    parser.add_argument("--address", help="Wallet address to analyze")
    parser.add_argument(
        "--chains",
        nargs="+",
        help="Chains to check (default: MULTICHAIN_DEFAULT_CHAINS or all supported)",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Query chains concurrently (result order is unchanged)",
    )
    parser.add_argument(
        "--list-chains",
        action="store_true",
        help="Print the supported chain table and exit",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the active gateway settings (API key redacted) and exit",
    )
    return parser


async def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = Config()
    if args.parallel:
        config.MULTICHAIN_PARALLEL = True

    if args.show_config:
        print(json.dumps(config.describe(), ensure_ascii=False, indent=2))
        return 0

    if not args.list_chains and not args.address:
        parser.error("--address is required unless --list-chains is given")

    try:
        tool = CryptoAnalysisTool(config)
        if args.list_chains:
            result = tool.list_supported_chains()
        else:
            result = await tool.analyze_wallet_multichain(
                address=args.address.strip(),
                chains=args.chains,
            )
    except Exception as exc:
        error_output = {"success": False, "error": str(exc)}
        print(json.dumps(error_output, ensure_ascii=False, indent=2), file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
