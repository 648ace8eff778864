"""Telegram signal bot entry point.

Validates configuration, verifies the bot token and long-polls Telegram for
commands until interrupted.

Usage:
    # Run the bot
    python scripts/run_bot.py

    # Handle one batch of pending updates and exit
    python scripts/run_bot.py --once

    # Verbose logging, mirrored to a file
    python scripts/run_bot.py --verbose --log-file logs/bot.log

Required environment (or .env):
    TELEGRAM_TOKEN   bot token from @BotFather
    CHAT_ID          channel to post to (negative = group, positive = user)

Optional environment:
    COINMARKETCAP_API_KEY, REDDIT_CLIENT_ID, REDDIT_CLIENT_SECRET,
    REDDIT_USER, REDDIT_PASS
"""

import argparse
import sys
from pathlib import Path

from src.analysis.pipeline import build_pipeline
from src.bot.commands import CommandRouter
from src.bot.runner import BotRunner
from src.bot.telegram_client import TelegramClient, TelegramError
from src.shared.config import Config
from src.shared.utils import setup_logger


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Run the crypto futures signal Telegram bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Process pending updates once and exit",
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
    """Start the bot."""
    args = parse_args()

    # Component loggers pick their level up from Config.LOG_LEVEL
    if args.verbose:
        Config.LOG_LEVEL = "DEBUG"
    logger = setup_logger("run_bot", log_file=args.log_file)

    try:
        Config.validate()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        logger.error("Set TELEGRAM_TOKEN and CHAT_ID in .env")
        return 1

    logger.info("Using CHAT_ID %s", Config.CHAT_ID)
    client = TelegramClient(log_file=args.log_file)

    try:
        me = client.get_me()
    except TelegramError as e:
        logger.error("Failed to initialize Telegram bot: %s", e)
        return 1
    logger.info("Authenticated as @%s", me.get("username", "?"))

    pipeline = build_pipeline(log_file=args.log_file)
    router = CommandRouter(client, pipeline, channel_id=int(Config.CHAT_ID), log_file=args.log_file)
    runner = BotRunner(client, router, log_file=args.log_file)

    try:
        if args.once:
            handled = runner.poll_once()
            logger.info("Handled %d update(s)", handled)
        else:
            runner.run_forever()
        return 0

    except TelegramError as e:
        logger.error("Polling error: %s", e)
        return 1

    except KeyboardInterrupt:
        logger.warning("Bot stopped by user")
        return 130

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
