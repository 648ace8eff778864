"""
Root pytest configuration.

Provides the canonical candle series used by the indicator golden-value
tests plus small factories for candles and mocked HTTP responses. No test
touches the network: every HTTP session is a Mock.
"""

from unittest.mock import Mock

import pytest

from src.market.models import Candle

BASE_TIMESTAMP = 1_704_067_200_000  # 2024-01-01T00:00:00Z in ms
HOUR_MS = 3_600_000

# 40 hourly candles: close = 100 + 5*sin(0.7*i) + 0.3*i (2 dp), open = previous close
CANONICAL_OPENS = [
    99.80, 100.00, 103.52, 105.53, 105.22, 102.87, 99.75, 97.44, 97.19, 99.24,
    102.78, 106.28, 108.24, 107.87, 105.50, 102.37, 100.10, 99.90, 102.01, 105.57,
    109.05, 110.95, 110.53, 108.12, 104.99, 102.76, 102.62, 104.78, 108.35, 111.81,
    113.66, 113.18, 110.74, 107.61, 105.42, 105.34, 107.54, 111.14, 114.57, 116.37,
]
CANONICAL_HIGHS = [
    100.50, 104.27, 106.53, 106.03, 105.97, 103.87, 100.25, 98.19, 100.24, 103.28,
    107.03, 109.24, 108.74, 108.62, 106.50, 102.87, 100.85, 103.01, 106.07, 109.80,
    111.95, 111.45, 111.28, 109.12, 105.49, 103.51, 105.78, 108.85, 112.56, 114.66,
    114.16, 113.93, 111.74, 108.11, 106.17, 108.54, 111.64, 115.32, 117.37, 116.87,
]
CANONICAL_LOWS = [
    99.40, 99.40, 102.72, 104.22, 102.47, 99.15, 96.64, 96.19, 96.79, 98.64,
    101.98, 105.28, 107.47, 104.90, 101.57, 99.10, 99.50, 99.30, 101.21, 104.57,
    108.65, 109.93, 107.32, 103.99, 102.36, 102.02, 101.82, 103.78, 107.95, 111.21,
    112.38, 109.74, 107.21, 104.82, 104.54, 104.34, 107.14, 110.54, 113.77, 114.84,
]
CANONICAL_CLOSES = [
    100.00, 103.52, 105.53, 105.22, 102.87, 99.75, 97.44, 97.19, 99.24, 102.78,
    106.28, 108.24, 107.87, 105.50, 102.37, 100.10, 99.90, 102.01, 105.57, 109.05,
    110.95, 110.53, 108.12, 104.99, 102.76, 102.62, 104.78, 108.35, 111.81, 113.66,
    113.18, 110.74, 107.61, 105.42, 105.34, 107.54, 111.14, 114.57, 116.37, 115.84,
]


@pytest.fixture
def canonical_candles() -> list[Candle]:
    """The 40-candle reference series."""
    return [
        Candle(
            timestamp=BASE_TIMESTAMP + i * HOUR_MS,
            open=o,
            high=h,
            low=l,
            close=c,
            volume=1000.0 + i,
        )
        for i, (o, h, l, c) in enumerate(
            zip(CANONICAL_OPENS, CANONICAL_HIGHS, CANONICAL_LOWS, CANONICAL_CLOSES)
        )
    ]


@pytest.fixture
def make_candles():
    """Factory: consistent hourly candles from a list of closes."""

    def _make(closes: list[float], spread: float = 1.0) -> list[Candle]:
        candles = []
        previous = closes[0] if closes else 0.0
        for i, close in enumerate(closes):
            candles.append(
                Candle(
                    timestamp=BASE_TIMESTAMP + i * HOUR_MS,
                    open=previous,
                    high=max(previous, close) + spread,
                    low=min(previous, close) - spread,
                    close=close,
                    volume=10.0,
                )
            )
            previous = close
        return candles

    return _make


@pytest.fixture
def make_response():
    """Factory: Mock HTTP response with a status code and JSON payload."""

    def _make(status_code: int = 200, payload=None) -> Mock:
        response = Mock()
        response.status_code = status_code
        response.json.return_value = payload
        return response

    return _make
