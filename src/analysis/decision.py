"""Scoring/decision engine: indicators + sentiment -> TrendResult.

Each signal adds points to the long and/or short side:

    EMA(12) vs EMA(26)      fast > slow: +0.3 long    fast < slow: +0.3 short
    RSI(14)                 < 70: +0.2 long           > 30: +0.2 short  (independent)
    MACD line vs signal     line > signal: +0.3 long  line < signal: +0.3 short
    Sentiment               POSITIVE: +0.2 long       NEGATIVE: +0.2 short

Both sides are then dampened by 1 / (1 + ATR / price), so more volatile
markets yield lower confidence either way. The long side is favored only
when its score is strictly greater; ties go short. Stop-loss sits 1.5 ATR
against the favored direction and take-profit 3 ATR with it (1:2 risk/reward).
"""

from dataclasses import dataclass
from pathlib import Path

from src.analysis.indicators import IndicatorSnapshot, compute_indicators
from src.market.models import Candle
from src.market.symbols import asset_name
from src.sentiment.engine import Sentiment, SentimentEngine
from src.shared.utils import setup_logger

EMA_POINTS = 0.3
RSI_POINTS = 0.2
MACD_POINTS = 0.3
SENTIMENT_POINTS = 0.2

RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0

STOP_LOSS_ATR = 1.5
TAKE_PROFIT_ATR = 3.0

LONG = "LONG"
SHORT = "SHORT"


@dataclass(frozen=True)
class TrendResult:
    """Directional scores and exit levels for one symbol."""

    symbol: str
    long_score: float
    short_score: float
    stop_loss: float | None
    take_profit: float | None
    atr: float

    @property
    def direction(self) -> str:
        return LONG if self.long_score > self.short_score else SHORT

    @property
    def confidence(self) -> float:
        return max(self.long_score, self.short_score)

    @property
    def has_levels(self) -> bool:
        return self.stop_loss is not None and self.take_profit is not None

    @classmethod
    def neutral(cls, symbol: str) -> "TrendResult":
        """Zero-score result used when there is not enough data."""
        return cls(symbol, 0.0, 0.0, None, None, 0.0)


def volatility_multiplier(atr: float, price: float) -> float:
    """Confidence dampening factor 1 / (1 + atr/price), in (0, 1] for atr >= 0."""
    return 1.0 / (1.0 + atr / price)


def compute_levels(price: float, atr: float, long_favored: bool) -> tuple[float, float]:
    """Stop-loss and take-profit for the favored direction."""
    if long_favored:
        return price - STOP_LOSS_ATR * atr, price + TAKE_PROFIT_ATR * atr
    return price + STOP_LOSS_ATR * atr, price - TAKE_PROFIT_ATR * atr


def score_snapshot(symbol: str, snapshot: IndicatorSnapshot, sentiment: Sentiment) -> TrendResult:
    """Apply the point table, dampening and exit levels to a snapshot."""
    long_score = 0.0
    short_score = 0.0

    if snapshot.ema_fast > snapshot.ema_slow:
        long_score += EMA_POINTS
    elif snapshot.ema_fast < snapshot.ema_slow:
        short_score += EMA_POINTS

    if snapshot.rsi < RSI_OVERBOUGHT:
        long_score += RSI_POINTS
    if snapshot.rsi > RSI_OVERSOLD:
        short_score += RSI_POINTS

    # Signal line undefined on short series: no MACD points
    if snapshot.macd_signal is not None:
        if snapshot.macd > snapshot.macd_signal:
            long_score += MACD_POINTS
        elif snapshot.macd < snapshot.macd_signal:
            short_score += MACD_POINTS

    if sentiment == Sentiment.POSITIVE:
        long_score += SENTIMENT_POINTS
    elif sentiment == Sentiment.NEGATIVE:
        short_score += SENTIMENT_POINTS

    multiplier = volatility_multiplier(snapshot.atr, snapshot.price)
    long_score *= multiplier
    short_score *= multiplier

    stop_loss, take_profit = compute_levels(
        snapshot.price, snapshot.atr, long_favored=long_score > short_score
    )
    return TrendResult(
        symbol=symbol,
        long_score=long_score,
        short_score=short_score,
        stop_loss=stop_loss,
        take_profit=take_profit,
        atr=snapshot.atr,
    )


class DecisionEngine:
    """Scores a symbol's candle series, fetching sentiment for its asset."""

    def __init__(self, sentiment_engine: SentimentEngine, log_file: Path | None = None) -> None:
        self.sentiment_engine = sentiment_engine
        self.logger = setup_logger(self.__class__.__name__, log_file)

    def decide(self, symbol: str, candles: list[Candle] | None) -> TrendResult:
        snapshot = compute_indicators(candles) if candles else None
        if snapshot is None:
            self.logger.info("Insufficient data for %s: %d candles", symbol, len(candles or []))
            return TrendResult.neutral(symbol)

        sentiment = self.sentiment_engine.assess(asset_name(symbol))
        result = score_snapshot(symbol, snapshot, sentiment)
        self.logger.info(
            "%s: long=%.3f short=%.3f atr=%.4f rsi=%.2f sentiment=%s",
            symbol,
            result.long_score,
            result.short_score,
            result.atr,
            snapshot.rsi,
            sentiment.value,
        )
        return result
