"""Shared utility functions for the crypto signal bot."""

import logging
import numbers
from datetime import datetime
from pathlib import Path

import pandas as pd
import pytz

from src.shared.config import Config

# Epoch values below this are taken to be seconds rather than milliseconds
# (1e11 seconds is the year 5138; 1e11 ms is early 1973).
_SECONDS_CUTOFF = 100_000_000_000


def setup_logger(
    name: str, log_file: Path | None = None, level: int | str | None = None
) -> logging.Logger:
    """Set up logger with console and file handlers.

    Calling this twice for the same name returns the already configured
    logger instead of stacking duplicate handlers.

    Args:
        name: Logger name
        log_file: Optional path to log file
        level: Logging level (int constant or string name like 'DEBUG', 'INFO').
            Defaults to Config.LOG_LEVEL.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = Config.LOG_LEVEL

    # Convert string level to int if needed
    if isinstance(level, str):
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(numeric_level)
    else:
        logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def to_utc(dt: datetime, from_tz: str = "UTC") -> datetime:
    """Convert datetime to UTC."""
    if dt.tzinfo is None:
        dt = pytz.timezone(from_tz).localize(dt)
    return dt.astimezone(pytz.UTC)


def to_epoch_ms(value: int | float | str | datetime) -> int:
    """Normalize a provider timestamp to integer epoch milliseconds.

    Accepts epoch seconds or milliseconds (numbers or numeric strings),
    ISO 8601 strings and datetimes. Naive values are assumed to be UTC.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")

    if isinstance(value, str):
        text = value.strip()
        try:
            value = float(text)
        except ValueError:
            try:
                parsed = pd.Timestamp(text)
            except (ValueError, TypeError) as exc:
                raise ValueError(f"Unparseable timestamp: {value!r}") from exc
            if pd.isna(parsed):
                raise ValueError(f"Unparseable timestamp: {value!r}")
            value = parsed.to_pydatetime()

    if isinstance(value, datetime):
        return int(round(to_utc(value).timestamp() * 1000))

    # numbers.Real also covers numpy scalars coming out of pandas columns
    if isinstance(value, numbers.Real):
        if value != value:  # NaN
            raise ValueError("Timestamp is NaN")
        if abs(value) < _SECONDS_CUTOFF:
            return int(round(float(value) * 1000))
        return int(value)

    raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")
