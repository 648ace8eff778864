"""Unit tests for CandleNormalizer (provider records -> Candle series)."""

import pytest

from src.market.models import Candle
from src.market.normalizer import CandleNormalizer

HOUR_MS = 3_600_000
T0 = 1_704_067_200_000

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def normalizer() -> CandleNormalizer:
    return CandleNormalizer()


def _record(ts, o=100.0, h=101.0, l=99.0, c=100.5, v=5.0):
    return {"timestamp": ts, "open": o, "high": h, "low": l, "close": c, "volume": v}


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


class TestConversion:
    def test_returns_candles(self, normalizer):
        candles = normalizer.normalize([_record(T0)])

        assert candles == [Candle(T0, 100.0, 101.0, 99.0, 100.5, 5.0)]

    def test_empty_records(self, normalizer):
        assert normalizer.normalize([]) == []

    def test_seconds_and_iso_timestamps(self, normalizer):
        candles = normalizer.normalize(
            [
                _record(T0 // 1000),
                _record("2024-01-01T01:00:00Z"),
                _record(str(T0 + 2 * HOUR_MS)),
            ]
        )

        assert [c.timestamp for c in candles] == [T0, T0 + HOUR_MS, T0 + 2 * HOUR_MS]

    def test_string_prices_coerced(self, normalizer):
        candles = normalizer.normalize([_record(T0, "100", "101", "99", "100.5", "7")])

        assert candles[0].close == 100.5
        assert candles[0].volume == 7.0

    def test_missing_volume_defaults_to_zero(self, normalizer):
        record = _record(T0)
        del record["volume"]

        candles = normalizer.normalize([record])

        assert candles[0].volume == 0.0

    def test_null_volume_defaults_to_zero(self, normalizer):
        candles = normalizer.normalize([_record(T0, v=None)])

        assert candles[0].volume == 0.0


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_drops_inconsistent_rows(self, normalizer):
        records = [
            _record(T0),
            _record(T0 + HOUR_MS, o=100.0, h=99.0, l=98.0, c=100.5),  # high below body
            _record(T0 + 2 * HOUR_MS, o=100.0, h=102.0, l=100.2, c=101.0),  # low above open
        ]

        candles = normalizer.normalize(records)

        assert [c.timestamp for c in candles] == [T0]

    def test_drops_non_positive_and_missing_prices(self, normalizer):
        records = [
            _record(T0),
            _record(T0 + HOUR_MS, o=0.0),
            _record(T0 + 2 * HOUR_MS, c=None),
            _record(T0 + 3 * HOUR_MS, h="n/a"),
        ]

        candles = normalizer.normalize(records)

        assert len(candles) == 1

    def test_drops_unparseable_timestamps(self, normalizer):
        candles = normalizer.normalize([_record("yesterday"), _record(None), _record(T0)])

        assert [c.timestamp for c in candles] == [T0]

    def test_all_invalid_returns_empty(self, normalizer):
        assert normalizer.normalize([_record(T0, o=-1.0)]) == []

    def test_every_candle_is_consistent(self, normalizer, canonical_candles):
        records = [c.__dict__ for c in canonical_candles]

        candles = normalizer.normalize(records)

        assert candles == canonical_candles
        assert all(c.is_consistent() for c in candles)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_sorted_ascending(self, normalizer):
        records = [_record(T0 + 2 * HOUR_MS), _record(T0), _record(T0 + HOUR_MS)]

        candles = normalizer.normalize(records)

        assert [c.timestamp for c in candles] == [T0, T0 + HOUR_MS, T0 + 2 * HOUR_MS]

    def test_duplicate_timestamps_keep_last(self, normalizer):
        records = [_record(T0, c=100.5), _record(T0, c=100.8)]

        candles = normalizer.normalize(records)

        assert len(candles) == 1
        assert candles[0].close == 100.8

    def test_limit_keeps_most_recent(self, normalizer):
        records = [_record(T0 + i * HOUR_MS) for i in range(10)]

        candles = normalizer.normalize(records, limit=3)

        assert [c.timestamp for c in candles] == [T0 + i * HOUR_MS for i in (7, 8, 9)]
