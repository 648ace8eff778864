"""Symbol universe and per-provider asset identifiers.

Symbols are "BASE/QUOTE" pairs with QUOTE fixed to USDT. Each provider names
assets differently, so a static table maps the base asset to the identifier
each provider expects.
"""

from dataclasses import dataclass

QUOTE_CURRENCY = "USDT"
DEFAULT_BASE = "BTC"


@dataclass(frozen=True)
class AssetIds:
    """Identifiers of one asset at each market data provider."""

    coingecko: str
    coinmarketcap: str
    coinpaprika: str


SYMBOL_IDS: dict[str, AssetIds] = {
    "BTC": AssetIds("bitcoin", "BTC", "btc-bitcoin"),
    "ETH": AssetIds("ethereum", "ETH", "eth-ethereum"),
    "SOL": AssetIds("solana", "SOL", "sol-solana"),
    "XRP": AssetIds("ripple", "XRP", "xrp-xrp"),
    "ADA": AssetIds("cardano", "ADA", "ada-cardano"),
    "DOGE": AssetIds("dogecoin", "DOGE", "doge-dogecoin"),
    "BNB": AssetIds("binancecoin", "BNB", "bnb-binance-coin"),
    "LTC": AssetIds("litecoin", "LTC", "ltc-litecoin"),
    "LINK": AssetIds("chainlink", "LINK", "link-chainlink"),
    "MATIC": AssetIds("matic-network", "MATIC", "matic-polygon"),
}

DEFAULT_IDS = SYMBOL_IDS[DEFAULT_BASE]

# Scanned in this order by the opportunity selector
SYMBOL_UNIVERSE: tuple[str, ...] = tuple(f"{base}/{QUOTE_CURRENCY}" for base in SYMBOL_IDS)


def base_asset(symbol: str) -> str:
    """Return the base asset of a "BASE/QUOTE" symbol, upper-cased."""
    return symbol.split("/")[0].strip().upper()


def normalize_symbol(text: str | None) -> str:
    """Turn user input such as "eth" or "ETH/USDT" into "ETH/USDT".

    Empty input yields the default symbol.
    """
    if not text or not text.strip():
        return f"{DEFAULT_BASE}/{QUOTE_CURRENCY}"
    base = base_asset(text)
    return f"{base}/{QUOTE_CURRENCY}"


def resolve_ids(symbol: str) -> AssetIds:
    """Provider identifiers for a symbol; unknown bases use the default asset."""
    return SYMBOL_IDS.get(base_asset(symbol), DEFAULT_IDS)


def is_known(symbol: str) -> bool:
    return base_asset(symbol) in SYMBOL_IDS


def asset_name(symbol: str) -> str:
    """Name used to search social posts about the symbol's asset.

    Known assets use their CoinGecko id ("bitcoin"); unknown ones fall back
    to the lower-cased base ("pepe").
    """
    ids = SYMBOL_IDS.get(base_asset(symbol))
    return ids.coingecko if ids else base_asset(symbol).lower()
