"""
Domain entities for market quotes, price history and news.
Zero external dependencies — pure Python dataclasses only.

Quotes are immutable snapshots replaced wholesale on every refresh; the
only supported way to build one is build_quote(), which derives the
formatted strings and the is_positive flag from the same change value.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

_NUMERIC_JUNK = re.compile(r"[^0-9.\-]")


def parse_number(value: str) -> float:
    """Parse a display string such as '+1.50%' or '$1,234.00' into a float (0 on failure)."""
    try:
        return float(_NUMERIC_JUNK.sub("", value or ""))
    except ValueError:
        return 0.0


@dataclass(frozen=True)
class Quote:
    symbol: str
    display_name: str
    price: str
    absolute_change: str
    percent_change: str
    is_positive: bool
    last_updated: datetime

    @property
    def price_value(self) -> float:
        return parse_number(self.price)

    @property
    def change_value(self) -> float:
        return parse_number(self.absolute_change)

    @property
    def percent_value(self) -> float:
        return parse_number(self.percent_change)


def format_price(value: float) -> str:
    return f"{value:.4f}" if value < 10 else f"{value:.2f}"


def build_quote(
    symbol: str,
    display_name: str,
    current: float,
    previous_close: float,
    last_updated: datetime | None = None,
) -> Quote:
    """Build a Quote from raw prices.

    Raises:
        ValueError: if *previous_close* is zero (percent change undefined).
    """
    if not previous_close:
        raise ValueError(f"previous close for {symbol!r} must be non-zero")
    change = current - previous_close
    percent = change / previous_close * 100
    is_positive = change >= 0
    sign = "+" if is_positive else ""
    return Quote(
        symbol=symbol.upper(),
        display_name=display_name or symbol.upper(),
        price=format_price(current),
        absolute_change=f"{sign}{change:.2f}",
        percent_change=f"{sign}{percent:.2f}%",
        is_positive=is_positive,
        last_updated=last_updated or datetime.now(timezone.utc),
    )


@dataclass(frozen=True)
class QuoteCacheEntry:
    quote: Quote
    fetched_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.fetched_at < ttl


@dataclass(frozen=True)
class HistoryPoint:
    label: str
    price: float


@dataclass(frozen=True)
class NewsItem:
    title: str
    source: str
    time: str
    url: str = "#"


@dataclass(frozen=True)
class Source:
    title: str
    url: str


@dataclass(frozen=True)
class QuoteResponse:
    data: list[Quote] = field(default_factory=list)
    sources: list[Source] = field(default_factory=list)


@dataclass(frozen=True)
class HistoryResponse:
    symbol: str
    time_range: str
    history: list[HistoryPoint] = field(default_factory=list)
    sources: list[Source] = field(default_factory=list)
    synthetic: bool = False


@dataclass(frozen=True)
class NewsResponse:
    news: list[NewsItem] = field(default_factory=list)
    sources: list[Source] = field(default_factory=list)
