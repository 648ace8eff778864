"""Plain-text rendering of analyses for chat delivery."""

from src.analysis.decision import LONG, SHORT
from src.analysis.pipeline import Analysis
from src.sentiment.engine import Sentiment

NEUTRAL = "NEUTRAL"


def _price(value: float | None) -> str:
    return f"{value:.2f}" if value is not None else "N/A"


def signal_label(analysis: Analysis) -> str:
    """LONG/SHORT, or NEUTRAL when there was not enough data to set levels."""
    result = analysis.result
    if not result.has_levels:
        return NEUTRAL
    return result.direction


def recommendation(signal: str, sentiment: Sentiment, fallback: str) -> str:
    if signal == LONG and sentiment == Sentiment.POSITIVE:
        return "Strong Buy (Futures Long)"
    if signal == SHORT and sentiment == Sentiment.NEGATIVE:
        return "Strong Sell (Futures Short)"
    return fallback


def _body(analysis: Analysis, signal: str) -> list[str]:
    result = analysis.result
    return [
        f"Signal: {signal}",
        f"Confidence: {result.confidence * 100:.1f}%",
        f"Sentiment: {analysis.sentiment.value}",
        f"Stop-Loss: {_price(result.stop_loss)}",
        f"Take-Profit: {_price(result.take_profit)}",
    ]


def format_analysis(analysis: Analysis) -> str:
    """Message for the /analyze command."""
    signal = signal_label(analysis)
    lines = [f"Futures Analysis for {analysis.result.symbol}:"]
    lines += _body(analysis, signal)
    lines.append(f"Recommendation: {recommendation(signal, analysis.sentiment, 'Hold')}")
    return "\n".join(lines)


def format_best_opportunity(analysis: Analysis) -> str:
    """Message for the /bestopportunity command."""
    signal = signal_label(analysis)
    lines = ["Best Futures Opportunity:", f"Symbol: {analysis.result.symbol}"]
    lines += _body(analysis, signal)
    lines.append(
        f"Recommendation: {recommendation(signal, analysis.sentiment, 'Consider Carefully')}"
    )
    return "\n".join(lines)
