"""Candle normalizer: provider records -> common Candle series.

Every provider maps its native payload to plain dicts with the keys
timestamp, open, high, low, close and (optionally) volume. This module turns
those dicts into a validated, ordered Candle list:

    - timestamp normalized to epoch milliseconds (seconds, ms or ISO 8601 in)
    - prices and volume coerced to float; missing volume becomes 0.0
    - rows with missing or non-positive prices dropped
    - OHLC consistency (high >= open/close, low <= open/close) enforced
    - ascending order, duplicate timestamps removed (last one wins)
    - truncated to the trailing `limit` rows
"""

import logging
from pathlib import Path

import pandas as pd

from src.market.models import CANDLE_COLUMNS, Candle
from src.shared.utils import setup_logger, to_epoch_ms

PRICE_COLUMNS = ["open", "high", "low", "close"]


class CandleNormalizer:
    """Normalizes raw provider records into Candle series."""

    def __init__(self, log_file: Path | None = None, logger: logging.Logger | None = None) -> None:
        self.logger = logger or setup_logger(self.__class__.__name__, log_file)

    def normalize(self, records: list[dict], limit: int | None = None) -> list[Candle]:
        """Normalize raw records.

        Args:
            records: Dicts with timestamp/open/high/low/close[/volume] keys.
            limit: Keep only the last `limit` candles (all if None).

        Returns:
            Ascending, de-duplicated list of valid candles (possibly empty).
        """
        if not records:
            return []

        df = pd.DataFrame.from_records(records)
        for column in CANDLE_COLUMNS:
            if column not in df.columns:
                df[column] = None

        df = df[CANDLE_COLUMNS].copy()
        df["timestamp"] = df["timestamp"].map(self._safe_epoch_ms)
        for column in PRICE_COLUMNS + ["volume"]:
            df[column] = pd.to_numeric(df[column], errors="coerce")
        df["volume"] = df["volume"].fillna(0.0).clip(lower=0.0)

        before = len(df)
        df = df.dropna(subset=["timestamp"] + PRICE_COLUMNS)
        df = df[(df[PRICE_COLUMNS] > 0).all(axis=1)]
        df = self.validate(df).copy()
        dropped = before - len(df)
        if dropped:
            self.logger.warning("Dropped %d invalid candle records of %d", dropped, before)

        df["timestamp"] = df["timestamp"].astype("int64")
        df = df.sort_values("timestamp", kind="mergesort")
        df = df.drop_duplicates(subset="timestamp", keep="last")
        if limit is not None:
            df = df.tail(limit)

        return [
            Candle(
                timestamp=int(row.timestamp),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
                volume=float(row.volume),
            )
            for row in df.itertuples(index=False)
        ]

    def validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """Keep only rows that satisfy OHLC consistency."""
        body_high = df[["open", "close"]].max(axis=1)
        body_low = df[["open", "close"]].min(axis=1)
        consistent = (df["high"] >= body_high) & (df["low"] <= body_low)
        return df[consistent]

    def _safe_epoch_ms(self, value: object) -> int | None:
        if value is None:
            return None
        try:
            return to_epoch_ms(value)  # type: ignore[arg-type]
        except ValueError:
            self.logger.debug("Unparseable timestamp %r", value)
            return None
