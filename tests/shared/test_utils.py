"""Tests for utility functions."""

import logging
from datetime import datetime
from unittest.mock import Mock

import pytest
import pytz

from src.market.providers.coinpaprika_provider import CoinpaprikaProvider
from src.shared.config import Config
from src.shared.utils import setup_logger, to_epoch_ms, to_utc

NEW_YEAR_2024_MS = 1_704_067_200_000


def test_setup_logger_basic(monkeypatch):
    """Test basic logger setup."""
    monkeypatch.setattr(Config, "LOG_LEVEL", "INFO")
    logger = setup_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"
    assert logger.level == logging.INFO


def test_setup_logger_with_file(tmp_path):
    """Test logger setup with file handler."""
    log_file = tmp_path / "test.log"
    logger = setup_logger("test_file_logger", log_file=log_file)

    assert log_file.exists()
    logger.info("Test message")

    assert log_file.read_text()


def test_setup_logger_custom_level():
    """Test logger with custom level."""
    logger = setup_logger("test_debug_logger", level=logging.DEBUG)
    assert logger.level == logging.DEBUG


def test_setup_logger_string_level():
    logger = setup_logger("test_string_level_logger", level="warning")
    assert logger.level == logging.WARNING


def test_setup_logger_follows_configured_level(monkeypatch):
    """Loggers created without an explicit level use Config.LOG_LEVEL."""
    monkeypatch.setattr(Config, "LOG_LEVEL", "DEBUG")

    assert setup_logger("test_configured_level_logger").level == logging.DEBUG
    assert CoinpaprikaProvider(session=Mock()).logger.level == logging.DEBUG


def test_setup_logger_does_not_stack_handlers():
    """Repeated setup for the same name keeps a single console handler."""
    first = setup_logger("test_repeated_logger")
    second = setup_logger("test_repeated_logger")
    assert first is second
    assert len(second.handlers) == 1


def test_to_utc_with_naive_datetime():
    """Naive datetimes are interpreted as UTC by default."""
    dt = datetime(2026, 2, 8, 12, 30, 45)
    utc_dt = to_utc(dt)
    assert utc_dt.tzinfo == pytz.UTC
    assert utc_dt.hour == 12


def test_to_utc_with_other_timezone():
    dt = datetime(2026, 2, 8, 12, 30, 45)
    utc_dt = to_utc(dt, from_tz="US/Eastern")
    assert utc_dt.hour == 17


class TestToEpochMs:
    """Provider timestamps in any supported form normalize to epoch ms."""

    def test_seconds(self):
        assert to_epoch_ms(1_704_067_200) == NEW_YEAR_2024_MS

    def test_fractional_seconds(self):
        assert to_epoch_ms(1_704_067_200.5) == NEW_YEAR_2024_MS + 500

    def test_milliseconds_unchanged(self):
        assert to_epoch_ms(NEW_YEAR_2024_MS) == NEW_YEAR_2024_MS

    def test_numeric_string(self):
        assert to_epoch_ms("1704067200") == NEW_YEAR_2024_MS
        assert to_epoch_ms("1704067200000") == NEW_YEAR_2024_MS

    def test_iso_with_zulu(self):
        assert to_epoch_ms("2024-01-01T00:00:00Z") == NEW_YEAR_2024_MS

    def test_iso_with_millis(self):
        assert to_epoch_ms("2024-01-01T01:00:00.000Z") == NEW_YEAR_2024_MS + 3_600_000

    def test_iso_with_offset(self):
        assert to_epoch_ms("2024-01-01T02:00:00+02:00") == NEW_YEAR_2024_MS

    def test_naive_iso_is_utc(self):
        assert to_epoch_ms("2024-01-01 00:00:00") == NEW_YEAR_2024_MS

    def test_naive_datetime_is_utc(self):
        assert to_epoch_ms(datetime(2024, 1, 1)) == NEW_YEAR_2024_MS

    def test_aware_datetime(self):
        eastern = pytz.timezone("US/Eastern")
        dt = eastern.localize(datetime(2023, 12, 31, 19, 0, 0))
        assert to_epoch_ms(dt) == NEW_YEAR_2024_MS

    @pytest.mark.parametrize("value", ["not a date", "", True, None, float("nan")])
    def test_invalid_values_raise(self, value):
        with pytest.raises(ValueError):
            to_epoch_ms(value)
