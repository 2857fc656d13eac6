"""
Use-case: retrieve a closing-price history series for charting.
Depends only on Domain ports and entities — no infrastructure imports.

When the provider returns fewer than two usable points the series is
replaced by a synthetic 30-day random walk ending at the current price
(100 when no quote is available), flagged with synthetic=True.
"""

import logging
import random
from datetime import date, timedelta
from typing import Callable, Optional

from marketminds.application.market.quote_service import QuoteService
from marketminds.domain.entities.market import HistoryPoint, HistoryResponse

logger = logging.getLogger(__name__)

SYNTHETIC_POINTS = 30
SYNTHETIC_ANCHOR = 100.0
SYNTHETIC_DAILY_VOLATILITY = 0.015


def synthesize_history(
    anchor: float,
    end: date,
    points: int = SYNTHETIC_POINTS,
    rng: Optional[random.Random] = None,
) -> list[HistoryPoint]:
    """Walk backwards from *anchor* so the last point equals it; prices never drop below 1."""
    rng = rng or random.Random()
    prices: list[float] = []
    price = anchor
    for _ in range(points):
        prices.insert(0, price)
        move = (rng.random() - 0.5) * 2 * price * SYNTHETIC_DAILY_VOLATILITY
        price = max(1.0, price - move)
    start = end - timedelta(days=points - 1)
    return [
        HistoryPoint(label=(start + timedelta(days=i)).isoformat(), price=round(p, 2))
        for i, p in enumerate(prices)
    ]


class GetHistoryUseCase:
    def __init__(
        self,
        quote_service: QuoteService,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._quotes = quote_service
        self._rng = rng
        self._today = today

    def execute(self, symbol: str, time_range: str = "1D") -> HistoryResponse:
        """Fetch history for *symbol* over *time_range*.

        Raises:
            ValueError: if *symbol* is blank.
            InvalidTimeRangeError: if *time_range* is not supported.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        response = self._quotes.get_history(symbol, time_range).value
        if len(response.history) >= 2:
            return response

        quotes = self._quotes.get_quotes([response.symbol]).value.data
        anchor = quotes[0].price_value if quotes and quotes[0].price_value > 0 else SYNTHETIC_ANCHOR
        logger.info("Using synthetic history for %s (%s), anchor %.2f", response.symbol, response.time_range, anchor)
        return HistoryResponse(
            symbol=response.symbol,
            time_range=response.time_range,
            history=synthesize_history(anchor, self._today(), rng=self._rng),
            sources=response.sources,
            synthetic=True,
        )
