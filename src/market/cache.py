"""In-memory candle cache.

Entries live for the lifetime of the owning pipeline: there is no TTL and no
eviction, so a long-running process keeps serving the first series it fetched
for a given key.
"""

from src.market.models import Candle

CacheKey = tuple[str, str, int]


class CandleCache:
    """Memoizes candle series by (symbol, timeframe, limit)."""

    def __init__(self) -> None:
        self._entries: dict[CacheKey, tuple[Candle, ...]] = {}

    @staticmethod
    def key(symbol: str, timeframe: str, limit: int) -> CacheKey:
        return (symbol, timeframe, limit)

    def get(self, symbol: str, timeframe: str, limit: int) -> list[Candle] | None:
        entry = self._entries.get(self.key(symbol, timeframe, limit))
        return list(entry) if entry is not None else None

    def set(self, symbol: str, timeframe: str, limit: int, candles: list[Candle]) -> None:
        self._entries[self.key(symbol, timeframe, limit)] = tuple(candles)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
