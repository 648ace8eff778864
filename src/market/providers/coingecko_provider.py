"""CoinGecko OHLC provider (free, no API key).

API Reference:
    Base URL: https://api.coingecko.com/api/v3
    OHLC:     GET /coins/{id}/ohlc?vs_currency=usd&days=1
    Payload:  [[timestamp_ms, open, high, low, close], ...]

CoinGecko picks the candle granularity from `days` (30-minute candles for
one day). It does not report volume, so volume is always 0.
"""

import requests

from src.market.providers.base_provider import BaseProvider, ProviderError
from src.market.symbols import resolve_ids


class CoinGeckoProvider(BaseProvider):
    """Market data from CoinGecko's public OHLC endpoint."""

    SOURCE_NAME = "coingecko"
    BASE_URL = "https://api.coingecko.com/api/v3"
    OHLC_ENDPOINT = "/coins/{coin_id}/ohlc"
    PING_ENDPOINT = "/ping"

    VS_CURRENCY = "usd"
    DAYS = 1

    def _fetch_records(self, symbol: str, timeframe: str, limit: int) -> list[dict]:
        coin_id = resolve_ids(symbol).coingecko
        url = f"{self.BASE_URL}{self.OHLC_ENDPOINT.format(coin_id=coin_id)}"
        payload = self._get_json(url, params={"vs_currency": self.VS_CURRENCY, "days": self.DAYS})

        if not isinstance(payload, list):
            raise ProviderError(f"Unexpected CoinGecko payload type: {type(payload).__name__}")

        return [self._parse_row(row) for row in payload[-limit:]]

    @staticmethod
    def _parse_row(row: list) -> dict:
        if len(row) < 5:
            raise ProviderError(f"Malformed CoinGecko OHLC row: {row!r}")
        return {
            "timestamp": row[0],
            "open": row[1],
            "high": row[2],
            "low": row[3],
            "close": row[4],
            "volume": 0.0,
        }

    def health_check(self) -> bool:
        try:
            response = self._session.get(f"{self.BASE_URL}{self.PING_ENDPOINT}", timeout=self.timeout)
            return bool(response.status_code == 200)
        except requests.RequestException:
            return False
