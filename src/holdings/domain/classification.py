"""Asset type normalization and sector lookup for securities."""

from typing import Optional, Union

from holdings.domain.models.enums import AssetType

# Lower-cased stored class -> normalized asset type
ASSET_TYPE_SYNONYMS: dict[str, AssetType] = {
    "stock": AssetType.STOCK,
    "stocks": AssetType.STOCK,
    "equity": AssetType.STOCK,
    "common stock": AssetType.STOCK,
    "share": AssetType.STOCK,
    "shares": AssetType.STOCK,
    "adr": AssetType.STOCK,
    "etf": AssetType.ETF,
    "etfs": AssetType.ETF,
    "exchange traded fund": AssetType.ETF,
    "fund": AssetType.ETF,
    "index fund": AssetType.ETF,
    "mutual fund": AssetType.ETF,
    "mutualfund": AssetType.ETF,
    "bond": AssetType.BOND,
    "bonds": AssetType.BOND,
    "fixed income": AssetType.BOND,
    "treasury": AssetType.BOND,
    "gic": AssetType.BOND,
    "crypto": AssetType.CRYPTO,
    "cryptocurrency": AssetType.CRYPTO,
    "coin": AssetType.CRYPTO,
    "token": AssetType.CRYPTO,
    "cash": AssetType.CASH,
    "money market": AssetType.CASH,
    "moneymarket": AssetType.CASH,
    "savings": AssetType.CASH,
    "other": AssetType.OTHER,
}

# Well-known tickers whose sector is stable enough to hard-code
SYMBOL_SECTORS: dict[str, str] = {
    "AAPL": "Technology",
    "MSFT": "Technology",
    "NVDA": "Technology",
    "AMD": "Technology",
    "GOOGL": "Communication Services",
    "GOOG": "Communication Services",
    "META": "Communication Services",
    "NFLX": "Communication Services",
    "AMZN": "Consumer Discretionary",
    "TSLA": "Consumer Discretionary",
    "JPM": "Financials",
    "V": "Financials",
    "BRK.B": "Financials",
    "JNJ": "Health Care",
    "UNH": "Health Care",
    "XOM": "Energy",
    "CVX": "Energy",
    "SPY": "Broad Market",
    "VOO": "Broad Market",
    "VTI": "Broad Market",
    "QQQ": "Technology",
}

ASSET_TYPE_SECTORS: dict[AssetType, str] = {
    AssetType.STOCK: "Other",
    AssetType.ETF: "Diversified",
    AssetType.BOND: "Fixed Income",
    AssetType.CRYPTO: "Cryptocurrency",
    AssetType.CASH: "Cash",
    AssetType.OTHER: "Other",
}


def normalize_asset_type(raw: Optional[Union[str, AssetType]]) -> AssetType:
    """
    Collapse a stored asset class into the fixed AssetType enumeration.

    Missing classes default to Stock; unrecognized ones become Other.
    """
    if isinstance(raw, AssetType):
        return raw
    if raw is None or not raw.strip():
        return AssetType.STOCK
    key = " ".join(raw.strip().lower().replace("_", " ").replace("-", " ").split())
    return ASSET_TYPE_SYNONYMS.get(key, AssetType.OTHER)


def infer_sector(asset_type: AssetType, symbol: str) -> str:
    """Infer a sector from the symbol lookup table, then the asset type."""
    if asset_type in (AssetType.STOCK, AssetType.ETF):
        sector = SYMBOL_SECTORS.get((symbol or "").strip().upper())
        if sector:
            return sector
    return ASSET_TYPE_SECTORS[asset_type]


def classify(
    asset_class: Optional[str],
    sector: Optional[str],
    symbol: str,
) -> tuple[AssetType, str]:
    """Return (asset_type, sector) for a security record."""
    asset_type = normalize_asset_type(asset_class)
    if sector and sector.strip():
        return asset_type, sector.strip()
    return asset_type, infer_sector(asset_type, symbol)
