"""Coinpaprika provider (alternate free source).

API Reference:
    Base URL: https://api.coinpaprika.com/v1
    History:  GET /tickers/{id}/historical?start={unix_seconds}&interval=1h&limit=101
    Payload:  [{"timestamp": "2024-01-01T00:00:00Z", "price": 42000.1,
                "volume_24h": 1.2e10, "market_cap": 8.2e11}, ...]

The ticker history is a price series, not OHLC: when a record has no
open/high/low/close fields every price field is set to `price`.
"""

from datetime import datetime, timedelta, timezone

import requests

from src.market.providers.base_provider import BaseProvider, ProviderError
from src.market.symbols import resolve_ids


class CoinpaprikaProvider(BaseProvider):
    """Market data from Coinpaprika's historical ticker endpoint."""

    SOURCE_NAME = "coinpaprika"
    BASE_URL = "https://api.coinpaprika.com/v1"
    HISTORY_ENDPOINT = "/tickers/{coin_id}/historical"
    GLOBAL_ENDPOINT = "/global"

    INTERVAL_HOURS = {"1h": 1, "1d": 24}

    def _fetch_records(self, symbol: str, timeframe: str, limit: int) -> list[dict]:
        coin_id = resolve_ids(symbol).coinpaprika
        hours = self.INTERVAL_HOURS.get(timeframe, 1)
        # Rows are returned forward from `start`, so start exactly `limit` intervals back
        start = datetime.now(tz=timezone.utc) - timedelta(hours=hours * limit)
        params = {
            "start": int(start.timestamp()),
            "interval": timeframe,
            "limit": limit + 1,
        }
        url = f"{self.BASE_URL}{self.HISTORY_ENDPOINT.format(coin_id=coin_id)}"
        payload = self._get_json(url, params=params)

        if not isinstance(payload, list):
            raise ProviderError(f"Unexpected Coinpaprika payload type: {type(payload).__name__}")

        return [self._parse_record(record) for record in payload[-limit:]]

    @staticmethod
    def _parse_record(record: dict) -> dict:
        price = record.get("price")
        return {
            "timestamp": record.get("timestamp"),
            "open": record.get("open", price),
            "high": record.get("high", price),
            "low": record.get("low", price),
            "close": record.get("close", price),
            "volume": record.get("volume", record.get("volume_24h")),
        }

    def health_check(self) -> bool:
        try:
            response = self._session.get(f"{self.BASE_URL}{self.GLOBAL_ENDPOINT}", timeout=self.timeout)
            return bool(response.status_code == 200)
        except requests.RequestException:
            return False
