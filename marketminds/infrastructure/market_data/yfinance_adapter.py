"""
Infrastructure adapter: yfinance → IMarketDataProvider (quotes and history).
All yfinance-specific details (download(), fast_info, info, history()) are
confined here; the rest of the codebase depends only on IMarketDataProvider.

Quotes come back keyed by the requested display symbol (e.g. "S&P 500"),
not by the Yahoo symbol ("^GSPC"), so the quote cache and the dashboard
agree on keys.
"""

import logging
import math

import pandas as pd
import yfinance as yf

from marketminds.domain.entities.market import HistoryPoint, NewsItem, Quote, build_quote
from marketminds.domain.errors import MarketDataError
from marketminds.domain.ports.market_data_port import IMarketDataProvider
from marketminds.infrastructure.market_data.symbol_map import TIME_RANGE_CONFIG, to_provider_symbol

logger = logging.getLogger(__name__)


def _finite(value) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class YFinanceMarketDataProvider(IMarketDataProvider):
    """Fetches quotes and price history from Yahoo Finance via the yfinance library."""

    def fetch_quotes(self, symbols: list[str]) -> list[Quote]:
        if not symbols:
            return []
        display_by_yahoo = {to_provider_symbol(s): s.strip().upper() for s in symbols}
        try:
            frame = yf.download(
                list(display_by_yahoo),
                period="5d",
                interval="1d",
                progress=False,
                auto_adjust=False,
                threads=True,
            )
        except Exception as exc:
            raise MarketDataError(f"Batch download failed: {exc}") from exc
        if frame is None or frame.empty:
            return []

        closes = frame["Close"]
        if isinstance(closes, pd.Series):
            closes = closes.to_frame(name=next(iter(display_by_yahoo)))

        quotes: list[Quote] = []
        for yahoo_symbol, display in display_by_yahoo.items():
            if yahoo_symbol not in closes.columns:
                continue
            series = closes[yahoo_symbol].dropna()
            if len(series) < 2:
                continue
            current = _finite(series.iloc[-1])
            previous = _finite(series.iloc[-2])
            if current is None or not previous:
                continue
            quotes.append(build_quote(display, display, current, previous))
        logger.debug("Batch download returned %d of %d quotes", len(quotes), len(symbols))
        return quotes

    def fetch_quote(self, symbol: str) -> Quote | None:
        display = symbol.strip().upper()
        try:
            ticker = yf.Ticker(to_provider_symbol(display))
            fast_info = ticker.fast_info
            current = _finite(getattr(fast_info, "last_price", None))
            previous = _finite(getattr(fast_info, "previous_close", None))
            info = ticker.info if current is None or not previous else {}
        except Exception as exc:
            raise MarketDataError(f"Quote lookup failed for {display!r}: {exc}") from exc

        current = current if current is not None else _finite(info.get("regularMarketPrice"))
        previous = previous or _finite(info.get("regularMarketPreviousClose")) or current
        if current is None or not previous:
            return None
        name = info.get("shortName") or info.get("longName") or display
        return build_quote(display, name, current, previous)

    def fetch_history(self, symbol: str, time_range: str = "1M") -> list[HistoryPoint]:
        period, interval, label_format = TIME_RANGE_CONFIG[time_range]
        try:
            history = yf.Ticker(to_provider_symbol(symbol)).history(period=period, interval=interval)
        except Exception as exc:
            raise MarketDataError(f"History lookup failed for {symbol!r}: {exc}") from exc

        points = []
        for timestamp, row in history.iterrows():
            close = _finite(row["Close"])
            if close is None:
                continue
            points.append(HistoryPoint(label=timestamp.strftime(label_format), price=round(close, 2)))
        return points

    def fetch_news(self, limit: int = 5) -> list[NewsItem]:
        raise MarketDataError("yfinance provider does not serve news")
