"""Market data providers, listed in failover priority order."""

from src.market.providers.base_provider import (
    BaseProvider,
    ProviderError,
    ProviderUnavailable,
    RateLimitedError,
)
from src.market.providers.coingecko_provider import CoinGeckoProvider
from src.market.providers.coinmarketcap_provider import CoinMarketCapProvider
from src.market.providers.coinpaprika_provider import CoinpaprikaProvider

__all__ = [
    "BaseProvider",
    "ProviderError",
    "ProviderUnavailable",
    "RateLimitedError",
    "CoinGeckoProvider",
    "CoinMarketCapProvider",
    "CoinpaprikaProvider",
]
