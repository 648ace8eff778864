"""CoinMarketCap OHLCV provider (requires an API key).

API Reference:
    Base URL: https://pro-api.coinmarketcap.com
    OHLCV:    GET /v2/cryptocurrency/ohlcv/historical?symbol=BTC&interval=hourly&count=100
    Auth:     X-CMC_PRO_API_KEY header
    Payload:  {"data": {"BTC": {"quotes": [{"time_open": ..., "quote": {"USD": {...}}}]}}}

The v2 endpoint keys `data` by symbol and may hold either a single object or
a list of objects (one per asset sharing the ticker); the first one is used.
Without COINMARKETCAP_API_KEY the provider reports itself unavailable and the
chain skips it.
"""

from pathlib import Path

import requests

from src.market.providers.base_provider import BaseProvider, ProviderError
from src.market.symbols import resolve_ids
from src.shared.config import Config


class CoinMarketCapProvider(BaseProvider):
    """Market data from CoinMarketCap's historical OHLCV endpoint."""

    SOURCE_NAME = "coinmarketcap"
    BASE_URL = "https://pro-api.coinmarketcap.com"
    OHLCV_ENDPOINT = "/v2/cryptocurrency/ohlcv/historical"
    KEY_INFO_ENDPOINT = "/v1/key/info"

    INTERVALS = {"1h": "hourly", "1d": "daily"}

    def __init__(
        self,
        api_key: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        log_file: Path | None = None,
    ) -> None:
        """Initialize the CoinMarketCap provider.

        Args:
            api_key: CoinMarketCap API key (defaults to Config.COINMARKETCAP_API_KEY).
            session: HTTP session to use.
            timeout: Per-request socket timeout in seconds.
            max_retries: Attempts per request when rate limited.
            retry_delay: Seconds to wait between rate-limited attempts.
            log_file: Optional path for file-based logging.
        """
        super().__init__(
            session=session,
            timeout=timeout,
            max_retries=max_retries,
            retry_delay=retry_delay,
            log_file=log_file,
        )
        self._api_key = api_key or Config.COINMARKETCAP_API_KEY
        if not self._api_key:
            self.logger.info("COINMARKETCAP_API_KEY not set, CoinMarketCap provider disabled")

    @property
    def is_available(self) -> bool:
        return bool(self._api_key)

    @property
    def _headers(self) -> dict[str, str]:
        return {"X-CMC_PRO_API_KEY": self._api_key or ""}

    def _fetch_records(self, symbol: str, timeframe: str, limit: int) -> list[dict]:
        cmc_symbol = resolve_ids(symbol).coinmarketcap
        params = {
            "symbol": cmc_symbol,
            "interval": self.INTERVALS.get(timeframe, "hourly"),
            "count": limit,
        }
        payload = self._get_json(f"{self.BASE_URL}{self.OHLCV_ENDPOINT}", params, self._headers)

        entry = (payload.get("data") or {}).get(cmc_symbol) if isinstance(payload, dict) else None
        if isinstance(entry, list):
            entry = entry[0] if entry else None
        if not entry:
            raise ProviderError(f"No CoinMarketCap OHLCV data for {cmc_symbol}")

        quotes = entry.get("quotes") or []
        return [self._parse_quote(quote) for quote in quotes[-limit:]]

    @staticmethod
    def _parse_quote(quote: dict) -> dict:
        usd = (quote.get("quote") or {}).get("USD") or {}
        return {
            "timestamp": quote.get("time_open") or usd.get("timestamp"),
            "open": usd.get("open"),
            "high": usd.get("high"),
            "low": usd.get("low"),
            "close": usd.get("close"),
            "volume": usd.get("volume"),
        }

    def health_check(self) -> bool:
        if not self.is_available:
            return False
        try:
            response = self._session.get(
                f"{self.BASE_URL}{self.KEY_INFO_ENDPOINT}",
                headers=self._headers,
                timeout=self.timeout,
            )
            return bool(response.status_code == 200)
        except requests.RequestException:
            return False
