"""Technical indicators over candle series.

All indicators follow their textbook definitions so results can be checked
against reference values:

    EMA(n)        SMA of the first n values as seed, then smoothing 2/(n+1)
    RSI(n)        Wilder: SMA seed of the first n gains/losses, then 1/n smoothing
    MACD(f,s,g)   EMA(f) - EMA(s); signal is EMA(g) of the MACD line
    ATR(n)        Wilder-smoothed true range; the first bar has no true range

Series functions return pandas Series aligned with their input, NaN where the
indicator is not yet defined. compute_indicators() condenses a candle series
into the last value of each indicator.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from src.market.models import Candle, candles_to_frame

EMA_FAST_PERIOD = 12
EMA_SLOW_PERIOD = 26
MACD_SIGNAL_PERIOD = 9
RSI_PERIOD = 14
ATR_PERIOD = 14

# EMA(26) needs 26 points; everything else is defined by then except the MACD
# signal line, which needs MACD_SIGNAL_PERIOD more MACD values.
MIN_CANDLES = EMA_SLOW_PERIOD


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Last value of each indicator for one candle series."""

    price: float
    ema_fast: float
    ema_slow: float
    rsi: float
    macd: float
    macd_signal: float | None
    macd_histogram: float | None
    atr: float


def _seeded_smoothing(values: pd.Series, period: int, alpha: float) -> pd.Series:
    """Exponential smoothing seeded with the SMA of the first `period` values."""
    if period <= 0:
        raise ValueError("period must be > 0")

    values = values.astype(float)
    if len(values) < period:
        return pd.Series(np.nan, index=values.index)

    seed = pd.Series([values.iloc[:period].mean()], index=[values.index[period - 1]])
    seeded = pd.concat([seed, values.iloc[period:]])
    smoothed = seeded.ewm(alpha=alpha, adjust=False).mean()
    return smoothed.reindex(values.index)


def ema(values: pd.Series, period: int) -> pd.Series:
    return _seeded_smoothing(values, period, 2.0 / (period + 1.0))


def rsi(closes: pd.Series, period: int = RSI_PERIOD) -> pd.Series:
    """Wilder's relative strength index (0-100)."""
    delta = closes.astype(float).diff().iloc[1:]
    gains = delta.clip(lower=0.0)
    losses = (-delta).clip(lower=0.0)

    avg_gain = _seeded_smoothing(gains, period, 1.0 / period)
    avg_loss = _seeded_smoothing(losses, period, 1.0 / period)

    with np.errstate(divide="ignore", invalid="ignore"):
        values = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
    # No losses over the window: fully overbought
    values = values.mask(avg_loss == 0, 100.0)
    return values.reindex(closes.index)


def macd(
    closes: pd.Series,
    fast_period: int = EMA_FAST_PERIOD,
    slow_period: int = EMA_SLOW_PERIOD,
    signal_period: int = MACD_SIGNAL_PERIOD,
) -> pd.DataFrame:
    """MACD line, signal line and histogram as columns macd/signal/histogram."""
    line = ema(closes, fast_period) - ema(closes, slow_period)
    signal = ema(line.dropna(), signal_period).reindex(closes.index)
    return pd.DataFrame(
        {"macd": line, "signal": signal, "histogram": line - signal},
        index=closes.index,
    )


def true_range(high: pd.Series, low: pd.Series, close: pd.Series) -> pd.Series:
    """True range per bar; NaN for the first bar, which has no previous close."""
    prev_close = close.shift(1)
    ranges = pd.concat(
        [high - low, (high - prev_close).abs(), (low - prev_close).abs()],
        axis=1,
    )
    tr = ranges.max(axis=1)
    tr.iloc[:1] = np.nan
    return tr


def atr(
    high: pd.Series, low: pd.Series, close: pd.Series, period: int = ATR_PERIOD
) -> pd.Series:
    """Wilder's average true range."""
    tr = true_range(high.astype(float), low.astype(float), close.astype(float))
    return _seeded_smoothing(tr.iloc[1:], period, 1.0 / period).reindex(close.index)


def _last(series: pd.Series) -> float | None:
    value = series.iloc[-1]
    return None if pd.isna(value) else float(value)


def compute_indicators(candles: list[Candle]) -> IndicatorSnapshot | None:
    """Snapshot of the latest indicator values.

    Returns None when fewer than MIN_CANDLES candles are given. With
    MIN_CANDLES to MIN_CANDLES + 7 candles the MACD signal line is not yet
    defined and macd_signal / macd_histogram are None.
    """
    if len(candles) < MIN_CANDLES:
        return None

    df = candles_to_frame(candles)
    close = df["close"]

    macd_frame = macd(close)
    values = {
        "ema_fast": _last(ema(close, EMA_FAST_PERIOD)),
        "ema_slow": _last(ema(close, EMA_SLOW_PERIOD)),
        "rsi": _last(rsi(close)),
        "macd": _last(macd_frame["macd"]),
        "atr": _last(atr(df["high"], df["low"], close)),
    }
    if any(value is None for value in values.values()):
        return None

    return IndicatorSnapshot(
        price=float(close.iloc[-1]),
        macd_signal=_last(macd_frame["signal"]),
        macd_histogram=_last(macd_frame["histogram"]),
        **values,  # type: ignore[arg-type]
    )
