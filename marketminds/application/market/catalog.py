"""
Static market catalogs used by the dashboard and the assistant.
Plain data: display symbols only; provider-specific symbol mapping lives in
the infrastructure adapters.
"""

MARKET_CATEGORIES: dict[str, list[str]] = {
    "Americas": ["S&P 500", "Dow Jones Industrial Average", "NASDAQ Composite", "Russell 2000", "VIX"],
    "Europe": ["FTSE 100", "DAX", "CAC 40", "STOXX 50", "SMI"],
    "Asia": ["Nikkei 225", "Hang Seng", "Shanghai Composite", "KOSPI", "Nifty 50"],
    "Commodities": [
        "Gold", "Silver", "Crude Oil WTI", "Brent Crude", "Natural Gas",
        "Copper", "Platinum", "Palladium", "Wheat", "Corn",
    ],
    "Currencies": ["EUR/USD", "GBP/USD", "USD/JPY", "USD/CNY", "BTC-USD", "ETH-USD"],
    "Bonds": [
        "US 10Y Treasury Yield", "US 2Y Treasury Yield", "US 5Y Treasury Yield",
        "US 30Y Treasury Yield", "German 10Y Bund", "UK 10Y Gilt", "Japan 10Y Bond",
    ],
}

DEFAULT_CATEGORY = "Americas"

# Symbols the assistant keeps in its snapshot for breadth/fear calculations.
TRACKED_SYMBOLS: list[str] = [
    "S&P 500", "NASDAQ COMPOSITE", "DOW JONES INDUSTRIAL AVERAGE",
    "AAPL", "MSFT", "GOOGL", "AMZN", "NVDA", "TSLA", "META",
    "GOLD", "CRUDE OIL WTI", "BTC-USD", "ETH-USD",
    "US 10Y TREASURY YIELD", "VIX", "AMD", "JPM", "V", "WMT",
]

SEARCH_KEYWORDS: dict[str, str] = {
    "solar": "TAN",
    "solar etf": "TAN",
    "clean energy": "ICLN",
    "energy": "XLE",
    "firstsolar": "FSLR",
    "first solar": "FSLR",
    "first solar inc": "FSLR",
}


def resolve_search_term(query: str) -> str:
    """Map a free-text lookup to a symbol: keyword alias first, else the upper-cased query."""
    raw = (query or "").strip()
    return SEARCH_KEYWORDS.get(raw.lower(), raw.upper())


def find_category(name: str) -> str | None:
    """Case-insensitive category lookup returning the canonical name."""
    lowered = (name or "").strip().lower()
    for category in MARKET_CATEGORIES:
        if category.lower() == lowered:
            return category
    return None
