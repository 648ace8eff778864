"""Configuration management for the crypto signal bot."""
import os
import re
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

CHAT_ID_PATTERN = re.compile(r"^-?\d+$")


class Config:
    """Application configuration."""

    # Telegram
    TELEGRAM_TOKEN: str = os.getenv("TELEGRAM_TOKEN", "")
    CHAT_ID: str = os.getenv("CHAT_ID", "").strip()
    POLL_TIMEOUT: int = int(os.getenv("POLL_TIMEOUT", "30"))

    # Market data
    COINMARKETCAP_API_KEY: Optional[str] = os.getenv("COINMARKETCAP_API_KEY") or None
    CANDLE_LIMIT: int = int(os.getenv("CANDLE_LIMIT", "100"))
    TIMEFRAME: str = "1h"

    # Reddit (sentiment source)
    REDDIT_CLIENT_ID: Optional[str] = os.getenv("REDDIT_CLIENT_ID") or None
    REDDIT_CLIENT_SECRET: Optional[str] = os.getenv("REDDIT_CLIENT_SECRET") or None
    REDDIT_USER: Optional[str] = os.getenv("REDDIT_USER") or None
    REDDIT_PASS: Optional[str] = os.getenv("REDDIT_PASS") or None

    # HTTP behaviour
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "10"))
    MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "3"))
    RETRY_DELAY: float = float(os.getenv("RETRY_DELAY", "1.0"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If the Telegram token is missing or CHAT_ID is not an
                integer (negative for groups, positive for direct chats).
        """
        if not cls.TELEGRAM_TOKEN:
            raise ValueError("TELEGRAM_TOKEN not set in environment")
        if not cls.CHAT_ID or not CHAT_ID_PATTERN.match(cls.CHAT_ID):
            raise ValueError(
                f"Invalid CHAT_ID {cls.CHAT_ID!r}: must be a negative number (group) "
                "or positive number (user)"
            )
