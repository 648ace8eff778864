"""Shared utilities and configuration."""

from src.shared.config import Config
from src.shared.utils import setup_logger, to_epoch_ms, to_utc

__all__ = ["Config", "setup_logger", "to_utc", "to_epoch_ms"]
