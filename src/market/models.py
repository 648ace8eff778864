"""Market data types shared by providers, the cache and the indicator engine."""

from dataclasses import dataclass

import pandas as pd

CANDLE_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]


@dataclass(frozen=True)
class Candle:
    """One OHLCV record for a fixed time bucket.

    timestamp is epoch milliseconds (UTC). volume is 0.0 when the source
    does not report it.
    """

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def is_consistent(self) -> bool:
        """True if the OHLC values satisfy the candle invariants."""
        return (
            self.high >= max(self.open, self.close)
            and self.low <= min(self.open, self.close)
            and self.volume >= 0
        )


def candles_to_frame(candles: list[Candle]) -> pd.DataFrame:
    """Build a DataFrame with one row per candle, columns CANDLE_COLUMNS."""
    return pd.DataFrame(
        [
            (c.timestamp, c.open, c.high, c.low, c.close, c.volume)
            for c in candles
        ],
        columns=CANDLE_COLUMNS,
    )
