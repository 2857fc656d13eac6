"""
Pure technical metrics over a price history and a quote.
No I/O: every function here is a deterministic function of its arguments.
"""

import math
from dataclasses import dataclass

from marketminds.domain.entities.market import HistoryPoint, Quote

INSUFFICIENT_DATA = "insufficient data"
DEFAULT_VIX = 15.0


@dataclass(frozen=True)
class PriceLevels:
    support: float
    resistance: float


@dataclass(frozen=True)
class MarketState:
    mood: str
    risk: str
    action: str

    @property
    def is_bullish(self) -> bool:
        return "bullish" in self.mood

    @property
    def is_bearish(self) -> bool:
        return "bearish" in self.mood


def _prices(history: list[HistoryPoint]) -> list[float]:
    return [point.price for point in history]


def volatility(history: list[HistoryPoint]) -> float:
    """Population stdev of point-over-point returns, in percent. 0 with fewer than 2 points."""
    if len(history) < 2:
        return 0.0
    prices = _prices(history)
    returns = [(cur - prev) / prev for prev, cur in zip(prices, prices[1:])]
    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    return math.sqrt(variance) * 100


def trend(history: list[HistoryPoint]) -> str:
    """Compare the mean of the first and last three points; needs at least 5 points."""
    if len(history) < 5:
        return INSUFFICIENT_DATA
    prices = _prices(history)
    first = sum(prices[:3]) / 3
    last = sum(prices[-3:]) / 3
    change = (last - first) / first * 100
    if change > 3:
        return "strong uptrend"
    if change > 1:
        return "mild uptrend"
    if change < -3:
        return "strong downtrend"
    if change < -1:
        return "mild downtrend"
    return "sideways consolidation"


def support_resistance(history: list[HistoryPoint]) -> PriceLevels:
    """Nearest-rank 15th/85th percentile of the sorted prices."""
    if len(history) < 2:
        return PriceLevels(0.0, 0.0)
    prices = sorted(_prices(history))
    n = len(prices)
    return PriceLevels(
        support=prices[math.floor(n * 0.15)],
        resistance=prices[math.floor(n * 0.85)],
    )


def momentum(quote: Quote, history: list[HistoryPoint]) -> float:
    """0.4 x daily change + 0.6 x change over the last 5-point window.

    With fewer than 5 history points this is just the daily percent change.
    """
    daily = quote.percent_value
    if len(history) < 5:
        return daily
    prices = _prices(history)
    anchor = prices[max(0, len(prices) - 5)]
    window_change = (prices[-1] - anchor) / anchor * 100
    return daily * 0.4 + window_change * 0.6


def market_state(bias: float, vix: float) -> MarketState:
    """Classify breadth (*bias*, share of tracked symbols up) and the fear index."""
    if bias > 0.7 and vix < 18:
        return MarketState("bullish", "low", "cautiously buy")
    if bias > 0.6 and vix < 22:
        return MarketState("slightly bullish", "moderate", "selective buying")
    if bias < 0.3 or vix > 30:
        return MarketState("bearish", "high", "defensive")
    if bias < 0.4 or vix > 25:
        return MarketState("slightly bearish", "elevated", "caution")
    return MarketState("mixed", "moderate", "wait for clarity")


def breadth(quotes: list[Quote]) -> tuple[list[Quote], list[Quote]]:
    """Split *quotes* into (gainers, losers) by the quote's own positivity flag."""
    gainers = [q for q in quotes if q.is_positive]
    losers = [q for q in quotes if not q.is_positive]
    return gainers, losers


def vix_level(quote: Quote | None) -> float:
    return quote.price_value if quote is not None else DEFAULT_VIX
