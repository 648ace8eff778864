"""Run the signal pipeline from the command line, without Telegram.

Usage:
    # Analyze BTC/USDT
    python scripts/scan_market.py

    # Analyze a specific asset
    python scripts/scan_market.py --symbol eth

    # Scan the whole universe and print the best opportunity
    python scripts/scan_market.py --best

    # Check which market data providers are reachable
    python scripts/scan_market.py --health-check

Example:
    $ python scripts/scan_market.py --symbol sol
    Futures Analysis for SOL/USDT:
    Signal: LONG
    Confidence: 77.6%
    Sentiment: NEUTRAL
    Stop-Loss: 141.27
    Take-Profit: 162.90
    Recommendation: Hold
"""

import argparse
import sys
from pathlib import Path

from src.analysis.pipeline import build_pipeline
from src.bot.formatter import format_analysis, format_best_opportunity
from src.market.symbols import normalize_symbol
from src.shared.config import Config
from src.shared.utils import setup_logger


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Compute crypto futures signals from public market data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--symbol",
        type=str,
        default=None,
        help="Base asset or pair to analyze (default: BTC)",
        metavar="SYMBOL",
    )
    group.add_argument(
        "--best",
        action="store_true",
        help="Scan the symbol universe and report the best opportunity",
    )
    group.add_argument(
        "--health-check",
        action="store_true",
        help="Run provider health checks only and exit",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write logs to this file",
        metavar="PATH",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def main() -> int:
    """Main scan script."""
    args = parse_args()

    # Component loggers pick their level up from Config.LOG_LEVEL
    if args.verbose:
        Config.LOG_LEVEL = "DEBUG"
    logger = setup_logger("scan_market", log_file=args.log_file)

    try:
        pipeline = build_pipeline(log_file=args.log_file)

        if args.health_check:
            results = pipeline.chain.health_check()
            for source, healthy in results.items():
                logger.info("Health check %s: %s", source, "PASSED" if healthy else "FAILED")
            return 0 if any(results.values()) else 1

        if args.best:
            analysis = pipeline.best_opportunity()
            if analysis is None:
                logger.warning("No opportunities found due to data issues.")
                return 1
            print(format_best_opportunity(analysis))
            return 0

        symbol = normalize_symbol(args.symbol)
        analysis = pipeline.analyze(symbol)
        if analysis is None:
            logger.warning("No market data available for %s", symbol)
            return 1
        print(format_analysis(analysis))
        return 0

    except KeyboardInterrupt:
        logger.warning("Scan interrupted by user")
        return 130

    except Exception as e:
        logger.exception("Unexpected error during scan: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
