"""Social sentiment engine.

assess() fetches recent posts about an asset, scores each one with a
PolarityScorer, averages the comparative scores and buckets the average:

    average >  0.05  -> POSITIVE
    average < -0.05  -> NEGATIVE
    otherwise        -> NEUTRAL   (including when no posts were found)

Sentiment is advisory input only, so assess() never raises: any fetch or
scoring failure is logged and reported as NEUTRAL.
"""

from enum import Enum
from pathlib import Path
from typing import Protocol

from src.sentiment.scorer import LexiconScorer, PolarityScorer
from src.shared.utils import setup_logger

POSITIVE_THRESHOLD = 0.05
NEGATIVE_THRESHOLD = -0.05
DEFAULT_POST_LIMIT = 50


class Sentiment(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


class PostSource(Protocol):
    def search(self, query: str, limit: int = DEFAULT_POST_LIMIT) -> list[str]:
        ...


def classify_polarity(average: float) -> Sentiment:
    """Bucket an average comparative score."""
    if average > POSITIVE_THRESHOLD:
        return Sentiment.POSITIVE
    if average < NEGATIVE_THRESHOLD:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


class SentimentEngine:
    """Turns social posts about an asset into a Sentiment bucket."""

    def __init__(
        self,
        source: PostSource,
        scorer: PolarityScorer | None = None,
        post_limit: int = DEFAULT_POST_LIMIT,
        log_file: Path | None = None,
    ) -> None:
        self.source = source
        self.scorer = scorer or LexiconScorer()
        self.post_limit = post_limit
        self.logger = setup_logger(self.__class__.__name__, log_file)

    def average_polarity(self, asset_name: str) -> float:
        """Mean comparative score of recent posts (0.0 when there are none).

        Raises whatever the source or scorer raises.
        """
        posts = self.source.search(asset_name, limit=self.post_limit)
        if not posts:
            return 0.0
        total = sum(self.scorer.comparative(text) for text in posts)
        return total / len(posts)

    def assess(self, asset_name: str) -> Sentiment:
        """Sentiment for an asset; NEUTRAL on any failure."""
        self.logger.info("Assessing sentiment for %s", asset_name)
        try:
            average = self.average_polarity(asset_name)
        except Exception as exc:
            self.logger.warning("Error analyzing sentiment for %s: %s", asset_name, exc)
            return Sentiment.NEUTRAL

        sentiment = classify_polarity(average)
        self.logger.info("Sentiment for %s: %.4f (%s)", asset_name, average, sentiment.value)
        return sentiment
