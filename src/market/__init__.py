"""Market data module - candle types, cache, providers and failover chain."""

from src.market.cache import CandleCache
from src.market.models import Candle
from src.market.provider_chain import ProviderChain

__all__ = ["Candle", "CandleCache", "ProviderChain"]
