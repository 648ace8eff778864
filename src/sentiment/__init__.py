"""Social sentiment module - post source, polarity scoring and bucketing."""

from src.sentiment.engine import Sentiment, SentimentEngine, classify_polarity
from src.sentiment.reddit_source import RedditSource, SentimentSourceError
from src.sentiment.scorer import LexiconScorer, PolarityScorer

__all__ = [
    "Sentiment",
    "SentimentEngine",
    "classify_polarity",
    "RedditSource",
    "SentimentSourceError",
    "LexiconScorer",
    "PolarityScorer",
]
