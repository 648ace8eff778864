"""Unit tests for symbol normalization and provider id lookup."""

import pytest

from src.market.symbols import (
    SYMBOL_UNIVERSE,
    asset_name,
    base_asset,
    is_known,
    normalize_symbol,
    resolve_ids,
)


class TestNormalizeSymbol:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("eth", "ETH/USDT"),
            ("ETH/USDT", "ETH/USDT"),
            (" sol ", "SOL/USDT"),
            ("btc/usdt", "BTC/USDT"),
            ("", "BTC/USDT"),
            (None, "BTC/USDT"),
            ("   ", "BTC/USDT"),
        ],
    )
    def test_normalize(self, text, expected):
        assert normalize_symbol(text) == expected

    def test_base_asset(self):
        assert base_asset("doge/USDT") == "DOGE"


class TestResolveIds:
    def test_known_symbol(self):
        ids = resolve_ids("ETH/USDT")

        assert ids.coingecko == "ethereum"
        assert ids.coinmarketcap == "ETH"
        assert ids.coinpaprika == "eth-ethereum"

    def test_unknown_symbol_falls_back_to_bitcoin(self):
        ids = resolve_ids("PEPE/USDT")

        assert ids.coingecko == "bitcoin"
        assert ids.coinpaprika == "btc-bitcoin"

    def test_is_known(self):
        assert is_known("BNB/USDT")
        assert not is_known("PEPE/USDT")


class TestUniverse:
    def test_ten_usdt_pairs(self):
        assert len(SYMBOL_UNIVERSE) == 10
        assert SYMBOL_UNIVERSE[0] == "BTC/USDT"
        assert all(symbol.endswith("/USDT") for symbol in SYMBOL_UNIVERSE)


class TestAssetName:
    def test_known_asset_uses_full_name(self):
        assert asset_name("BTC/USDT") == "bitcoin"
        assert asset_name("MATIC/USDT") == "matic-network"

    def test_unknown_asset_uses_base(self):
        assert asset_name("PEPE/USDT") == "pepe"
