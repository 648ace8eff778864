"""Abstract base class for market data providers.

A provider turns (symbol, timeframe, limit) into a normalized Candle series
from one upstream HTTP API. Providers are tried in order by ProviderChain, so
the contract is:

- fetch_candles() returns a non-empty list of Candles or raises ProviderError
- HTTP 429 is retried locally (MAX_RETRIES attempts, RETRY_DELAY seconds
  apart); any other failure raises immediately so the chain can move on
- a provider that cannot run (e.g. missing API key) raises ProviderUnavailable
"""

import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import requests

from src.market.models import Candle
from src.market.normalizer import CandleNormalizer
from src.shared.config import Config
from src.shared.utils import setup_logger


class ProviderError(Exception):
    """A provider could not deliver candles for a request."""


class ProviderUnavailable(ProviderError):
    """The provider is not configured (e.g. missing credentials)."""


class RateLimitedError(ProviderError):
    """The provider kept answering HTTP 429 after every retry."""


class BaseProvider(ABC):
    """Base class for all market data providers.

    Subclasses must define:
        SOURCE_NAME (str): identifier used in logs (e.g. "coingecko").
        BASE_URL (str): API root.

    Subclasses must implement:
        _fetch_records(): call the API and map its payload to raw dicts.
        health_check(): verify the source is reachable.
    """

    SOURCE_NAME: str
    BASE_URL: str

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        log_file: Path | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            session: HTTP session to use (a new one is built if omitted).
            timeout: Per-request socket timeout in seconds.
            max_retries: Attempts per request when rate limited.
            retry_delay: Seconds to wait between rate-limited attempts.
            log_file: Optional path for file-based logging.
        """
        self.logger = setup_logger(self.__class__.__name__, log_file)
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else Config.MAX_RETRIES
        self.retry_delay = retry_delay if retry_delay is not None else Config.RETRY_DELAY
        self._session = session or self._build_session()
        self._normalizer = CandleNormalizer(logger=self.logger)

    @property
    def is_available(self) -> bool:
        """Whether the provider has everything it needs to make requests."""
        return True

    def fetch_candles(self, symbol: str, timeframe: str, limit: int) -> list[Candle]:
        """Fetch the last `limit` candles for a symbol.

        Raises:
            ProviderUnavailable: If the provider is not configured.
            ProviderError: On any HTTP, payload or empty-result failure.
        """
        if not self.is_available:
            raise ProviderUnavailable(f"{self.SOURCE_NAME} is not configured")

        records = self._fetch_records(symbol, timeframe, limit)
        if not records:
            raise ProviderError(f"{self.SOURCE_NAME} returned no OHLCV data for {symbol}")

        candles = self._normalizer.normalize(records, limit=limit)
        if not candles:
            raise ProviderError(f"{self.SOURCE_NAME} returned no valid candles for {symbol}")

        self.logger.info("Fetched %d candles for %s from %s", len(candles), symbol, self.SOURCE_NAME)
        return candles

    @abstractmethod
    def _fetch_records(self, symbol: str, timeframe: str, limit: int) -> list[dict]:
        """Call the API and map each native record to a raw candle dict.

        Returns:
            Dicts with timestamp, open, high, low, close and optional volume.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Verify the data source is reachable and responding.

        Returns:
            True if the source is available, False otherwise.
        """
        ...

    # ------------------------------------------------------------------
    # HTTP layer
    # ------------------------------------------------------------------

    def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Execute a GET request, retrying only on HTTP 429.

        Raises:
            RateLimitedError: If every attempt was rate limited.
            ProviderError: On transport errors, non-200 status or invalid JSON.
        """
        self.logger.debug("Fetching %s: %s params=%s", self.SOURCE_NAME, url, params)

        for attempt in range(1, self.max_retries + 1):
            try:
                response = self._session.get(
                    url, params=params, headers=headers, timeout=self.timeout
                )
            except requests.RequestException as exc:
                raise ProviderError(f"{self.SOURCE_NAME} request failed: {exc}") from exc

            if response.status_code == 429:
                if attempt < self.max_retries:
                    self.logger.warning(
                        "Rate limited (429) by %s. Retrying in %.1fs (attempt %d/%d).",
                        self.SOURCE_NAME,
                        self.retry_delay,
                        attempt,
                        self.max_retries,
                    )
                    time.sleep(self.retry_delay)
                continue

            if response.status_code != 200:
                raise ProviderError(f"{self.SOURCE_NAME} returned HTTP {response.status_code}")

            try:
                return response.json()
            except ValueError as exc:
                raise ProviderError(f"{self.SOURCE_NAME} returned invalid JSON") from exc

        raise RateLimitedError(
            f"{self.SOURCE_NAME} still rate limited after {self.max_retries} attempts"
        )

    def _build_session(self) -> requests.Session:
        """Build a requests Session with JSON headers."""
        session = requests.Session()
        session.headers.update(
            {
                "User-Agent": "crypto-signal-bot/0.1",
                "Accept": "application/json",
            }
        )
        return session
