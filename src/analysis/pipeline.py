"""Signal pipeline: one explicitly-owned set of collaborators per process.

The pipeline owns the candle cache, the provider chain, the sentiment engine,
the decision engine and the opportunity selector, so nothing in the signal
path relies on module-level state.
"""

from dataclasses import dataclass
from pathlib import Path

from src.analysis.decision import DecisionEngine, TrendResult
from src.analysis.opportunity import OpportunitySelector
from src.market.cache import CandleCache
from src.market.provider_chain import ProviderChain
from src.market.symbols import asset_name, is_known, normalize_symbol
from src.sentiment.engine import Sentiment, SentimentEngine
from src.sentiment.reddit_source import RedditSource
from src.shared.config import Config
from src.shared.utils import setup_logger


@dataclass(frozen=True)
class Analysis:
    """A decision together with the sentiment shown next to it."""

    result: TrendResult
    sentiment: Sentiment


class SignalPipeline:
    """Fetch, score and select trading suggestions."""

    def __init__(
        self,
        chain: ProviderChain,
        sentiment_engine: SentimentEngine,
        decision_engine: DecisionEngine | None = None,
        selector: OpportunitySelector | None = None,
        log_file: Path | None = None,
    ) -> None:
        self.chain = chain
        self.sentiment_engine = sentiment_engine
        self.decision_engine = decision_engine or DecisionEngine(sentiment_engine, log_file=log_file)
        self.selector = selector or OpportunitySelector(chain, self.decision_engine, log_file=log_file)
        self.logger = setup_logger(self.__class__.__name__, log_file)

    @property
    def cache(self) -> CandleCache:
        return self.chain.cache

    def analyze(self, symbol: str) -> Analysis | None:
        """Analyze one symbol; None when no provider has data for it."""
        symbol = normalize_symbol(symbol)
        if not is_known(symbol):
            self.logger.warning("Unknown asset in %s, price data falls back to the default asset", symbol)

        candles = self.chain.fetch_candles(symbol)
        if candles is None:
            return None

        result = self.decision_engine.decide(symbol, candles)
        return Analysis(result, self.sentiment_engine.assess(asset_name(symbol)))

    def best_opportunity(self) -> Analysis | None:
        """Best symbol in the universe with freshly assessed sentiment."""
        best = self.selector.best_opportunity()
        if best is None:
            return None
        return Analysis(best, self.sentiment_engine.assess(asset_name(best.symbol)))


def build_pipeline(config: type[Config] = Config, log_file: Path | None = None) -> SignalPipeline:
    """Wire the production pipeline from configuration."""
    chain = ProviderChain.default(
        cache=CandleCache(),
        coinmarketcap_api_key=config.COINMARKETCAP_API_KEY,
        log_file=log_file,
    )
    source = RedditSource(
        client_id=config.REDDIT_CLIENT_ID,
        client_secret=config.REDDIT_CLIENT_SECRET,
        username=config.REDDIT_USER,
        password=config.REDDIT_PASS,
        log_file=log_file,
    )
    if not source.is_configured:
        setup_logger("SignalPipeline", log_file).warning(
            "Reddit credentials missing, sentiment will always be NEUTRAL"
        )
    return SignalPipeline(chain, SentimentEngine(source, log_file=log_file), log_file=log_file)
