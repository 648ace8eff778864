"""Market data provider chain with cache and ordered failover.

Providers are tried in priority order (free keyless source first, keyed
source next, alternate free source last); the first one that delivers a
non-empty series wins and its result is cached. When every provider fails
the chain returns None: callers treat that as "skip this symbol".

Example:
    >>> chain = ProviderChain.default()
    >>> candles = chain.fetch_candles("ETH/USDT")
    >>> if candles is None:
    ...     print("no data")
"""

from pathlib import Path
from typing import Sequence

from src.market.cache import CandleCache
from src.market.models import Candle
from src.market.providers import (
    BaseProvider,
    CoinGeckoProvider,
    CoinMarketCapProvider,
    CoinpaprikaProvider,
    ProviderError,
    ProviderUnavailable,
)
from src.shared.config import Config
from src.shared.utils import setup_logger


class ProviderChain:
    """Fetches candles from the first provider that can deliver them."""

    def __init__(
        self,
        providers: Sequence[BaseProvider],
        cache: CandleCache | None = None,
        log_file: Path | None = None,
    ) -> None:
        """Initialize the chain.

        Args:
            providers: Providers in failover priority order.
            cache: Candle cache owned by the caller (a fresh one if omitted).
            log_file: Optional path for file-based logging.
        """
        if not providers:
            raise ValueError("ProviderChain needs at least one provider")
        self.providers = list(providers)
        self.cache = cache if cache is not None else CandleCache()
        self.logger = setup_logger(self.__class__.__name__, log_file)

    @classmethod
    def default(
        cls,
        cache: CandleCache | None = None,
        coinmarketcap_api_key: str | None = None,
        log_file: Path | None = None,
    ) -> "ProviderChain":
        """Build the production chain: CoinGecko, CoinMarketCap, Coinpaprika."""
        providers: list[BaseProvider] = [
            CoinGeckoProvider(log_file=log_file),
            CoinMarketCapProvider(api_key=coinmarketcap_api_key, log_file=log_file),
            CoinpaprikaProvider(log_file=log_file),
        ]
        return cls(providers, cache=cache, log_file=log_file)

    def fetch_candles(
        self,
        symbol: str,
        timeframe: str = Config.TIMEFRAME,
        limit: int = Config.CANDLE_LIMIT,
    ) -> list[Candle] | None:
        """Return the last `limit` candles for a symbol, or None if no provider has them."""
        cached = self.cache.get(symbol, timeframe, limit)
        if cached is not None:
            self.logger.info("Using cached data for %s", symbol)
            return cached

        for position, provider in enumerate(self.providers, start=1):
            try:
                candles = provider.fetch_candles(symbol, timeframe, limit)
            except ProviderUnavailable as exc:
                self.logger.info("Skipping provider %d (%s): %s", position, provider.SOURCE_NAME, exc)
                continue
            except ProviderError as exc:
                self.logger.warning(
                    "Provider %d (%s) failed for %s: %s",
                    position,
                    provider.SOURCE_NAME,
                    symbol,
                    exc,
                )
                continue
            except Exception:
                self.logger.exception(
                    "Provider %d (%s) raised unexpectedly for %s",
                    position,
                    provider.SOURCE_NAME,
                    symbol,
                )
                continue

            self.cache.set(symbol, timeframe, limit, candles)
            return candles

        self.logger.error("All providers failed for %s", symbol)
        return None

    def health_check(self) -> dict[str, bool]:
        """Run every provider's health check, keyed by source name."""
        return {provider.SOURCE_NAME: provider.health_check() for provider in self.providers}
