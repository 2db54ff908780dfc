"""
Command line entry point: scan tickers and print one recommendation line.

    python scan.py                 # SCANNER_TICKERS / SCANNER_TICKER_FILE / built-in list
    python scan.py AAPL MSFT TSLA
    python scan.py --file tickers.txt --language en
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from core.config import (
    get_language,
    get_log_level,
    get_ticker_env,
    get_ticker_file,
    load_criteria,
    validate_criteria,
)
from core.errors import ConfigError
from core.scanner import give_purchase_recommendation
from core.tickers import get_default_tickers, load_tickers, parse_ticker_list
from integrations.alphavantage import AlphaVantageClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recommend the first ticker meeting the RSI, EMA/SMA and volume buy conditions.")
    parser.add_argument('tickers', nargs='*', help="Ticker symbols, scanned in order")
    parser.add_argument('--file', help="Newline-delimited ticker file")
    parser.add_argument('--language', help="Output language (fi, en)")
    parser.add_argument('--rsi-threshold', type=float, help="Buy when RSI is at or below this")
    parser.add_argument('--ema-period', type=int, help="EMA period")
    parser.add_argument('--sma-period', type=int, help="SMA period")
    parser.add_argument('--exclude-latest-volume', action='store_true',
                        help="Leave the latest day out of the volume average")
    return parser


def resolve_tickers(args: argparse.Namespace) -> List[str]:
    """Positional args, then --file, then SCANNER_TICKERS, SCANNER_TICKER_FILE, built-in list."""
    if args.tickers:
        return list(args.tickers)
    if args.file:
        return load_tickers(args.file)
    raw = get_ticker_env()
    if raw:
        return parse_ticker_list(raw)
    ticker_file = get_ticker_file()
    if ticker_file:
        return load_tickers(ticker_file)
    return get_default_tickers()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=get_log_level(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        criteria = load_criteria()
        overrides = {}
        if args.rsi_threshold is not None:
            overrides['rsi_threshold'] = args.rsi_threshold
        if args.ema_period is not None:
            overrides['ema_period'] = args.ema_period
        if args.sma_period is not None:
            overrides['sma_period'] = args.sma_period
        if args.exclude_latest_volume:
            overrides['volume_include_latest'] = False
        criteria = validate_criteria(replace(criteria, **overrides))

        tickers = resolve_tickers(args)
        client = AlphaVantageClient.from_env()
    except ConfigError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 2

    logger.info(f"Scanning {len(tickers)} ticker(s) with {criteria}")
    print(give_purchase_recommendation(
        tickers, client, criteria, args.language or get_language()))
    return 0


if __name__ == '__main__':
    sys.exit(main())
