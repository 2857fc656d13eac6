"""
Display symbol (as shown on the dashboard) → Yahoo Finance symbol, plus the
per-range download settings. Anything not listed is passed through as-is.
"""

SYMBOL_MAP: dict[str, str] = {
    "S&P 500": "^GSPC",
    "DOW JONES INDUSTRIAL AVERAGE": "^DJI",
    "NASDAQ COMPOSITE": "^IXIC",
    "RUSSELL 2000": "^RUT",
    "VIX": "^VIX",
    "FTSE 100": "^FTSE",
    "DAX": "^GDAXI",
    "CAC 40": "^FCHI",
    "STOXX 50": "^STOXX50E",
    "SMI": "^SSMI",
    "NIKKEI 225": "^N225",
    "HANG SENG": "^HSI",
    "SHANGHAI COMPOSITE": "000001.SS",
    "KOSPI": "^KS11",
    "NIFTY 50": "^NSEI",
    "GOLD": "GC=F",
    "SILVER": "SI=F",
    "CRUDE OIL WTI": "CL=F",
    "BRENT CRUDE": "BZ=F",
    "NATURAL GAS": "NG=F",
    "COPPER": "HG=F",
    "PLATINUM": "PL=F",
    "PALLADIUM": "PA=F",
    "WHEAT": "ZW=F",
    "CORN": "ZC=F",
    "EUR/USD": "EURUSD=X",
    "GBP/USD": "GBPUSD=X",
    "USD/JPY": "JPY=X",
    "USD/CNY": "CNY=X",
    "BTC-USD": "BTC-USD",
    "ETH-USD": "ETH-USD",
    "US 10Y TREASURY YIELD": "^TNX",
    "US 2Y TREASURY YIELD": "^IRX",
    "US 5Y TREASURY YIELD": "^FVX",
    "US 30Y TREASURY YIELD": "^TYX",
    "GERMAN 10Y BUND": "^BUND",
    "UK 10Y GILT": "^GILT",
    "JAPAN 10Y BOND": "^JGB",
}

# range → (yfinance period, interval, strftime label format)
TIME_RANGE_CONFIG: dict[str, tuple[str, str, str]] = {
    "1D": ("1d", "5m", "%I:%M %p"),
    "1W": ("5d", "15m", "%a %I:%M %p"),
    "1M": ("1mo", "1h", "%Y-%m-%d"),
    "1Y": ("1y", "1d", "%Y-%m-%d"),
    "5Y": ("5y", "1wk", "%Y-%m-%d"),
    "MAX": ("max", "1mo", "%Y-%m-%d"),
}


def to_provider_symbol(display_symbol: str) -> str:
    upper = display_symbol.strip().upper()
    return SYMBOL_MAP.get(upper, upper)
