from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from cryptoprice.api import CryptoPriceAPI
from cryptoprice.fetcher import TRANSPORTS, PageFetcher
from cryptoprice.models import DEFAULT_COIN, DEFAULT_PROVIDER, METRICS, FieldSelection, Provider


def _build_api(args: argparse.Namespace) -> CryptoPriceAPI:
    headers = {"User-Agent": args.user_agent} if args.user_agent else None
    fetcher = PageFetcher(transport=args.transport, timeout=args.timeout, headers=headers)

    if args.all:
        fields = FieldSelection.all()
    elif args.fields:
        fields = FieldSelection.of(*args.fields)
    else:
        fields = FieldSelection()

    return CryptoPriceAPI(coin=args.coin, provider=args.provider, fields=fields, fetcher=fetcher)


def run_query(args: argparse.Namespace) -> int:
    api = _build_api(args)
    data = api.get_data()
    if data is None:
        print(f"No data available for {api.coin} on {args.provider}", file=sys.stderr)
        return 1

    if args.json:
        print(data.to_json())
        return 0

    for name, value in data.to_plain().items():
        print(f"{name:<14} {value}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=CryptoPriceAPI.description())
    parser.add_argument("--coin", default=DEFAULT_COIN, help="Coin name as used in the provider URL")
    parser.add_argument("--provider", default=DEFAULT_PROVIDER.value, help="Price provider (driver)")
    parser.add_argument("--list-providers", action="store_true", help="List supported providers and exit")

    parser.add_argument("--fields", nargs="+", choices=METRICS, metavar="FIELD",
                        help=f"Metrics to return ({', '.join(METRICS)}); default: price")
    parser.add_argument("--all", action="store_true", help="Return every metric")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    parser.add_argument("--transport", choices=TRANSPORTS, default="requests", help="HTTP client to fetch with")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--user-agent", default=None, help="Override the User-Agent header")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_providers:
        for provider in Provider:
            print(provider.value)
        return 0

    return run_query(args)


if __name__ == "__main__":
    sys.exit(main())
