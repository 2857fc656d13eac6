"""
Use-case: value a portfolio against the quote cache.
Depends only on Domain ports and entities — no infrastructure imports.
"""

import asyncio
import logging
from typing import Callable, Iterable

from marketminds.application.market.quote_service import QuoteService
from marketminds.domain.entities.portfolio import (
    PortfolioPosition,
    PortfolioValuation,
    PositionValuation,
)

logger = logging.getLogger(__name__)

VERY_HIGH_CONCENTRATION = 50.0
HIGH_CONCENTRATION = 30.0


def concentration_label(allocation: float) -> str:
    if allocation > VERY_HIGH_CONCENTRATION:
        return "very high"
    if allocation > HIGH_CONCENTRATION:
        return "high"
    return "moderate"


class ValuePortfolioUseCase:
    def __init__(self, quote_service: QuoteService) -> None:
        self._quotes = quote_service

    def execute(self, positions: Iterable[PortfolioPosition]) -> PortfolioValuation:
        """Total value, per-position allocation (%) and concentration of the largest position.

        Positions without a quote are valued at 0.
        """
        positions = list(positions)
        if not positions:
            return PortfolioValuation(total_value=0.0)

        quotes = self._quotes.get_quotes([p.symbol for p in positions]).value.data
        prices = {q.symbol: q.price_value for q in quotes}

        values = [(p, prices.get(p.symbol.upper(), 0.0)) for p in positions]
        total = sum(p.quantity * price for p, price in values)
        valued = [
            PositionValuation(
                symbol=p.symbol,
                quantity=p.quantity,
                price=price,
                value=p.quantity * price,
                allocation=(p.quantity * price / total * 100) if total > 0 else 0.0,
            )
            for p, price in values
        ]
        largest = max(valued, key=lambda v: v.value)
        return PortfolioValuation(
            total_value=total,
            positions=valued,
            largest=largest,
            concentration=concentration_label(largest.allocation),
        )

    async def poll(self, symbols: Callable[[], list[str]], interval: float) -> None:
        """Keep the quote cache warm for every held or watched symbol."""
        while True:
            try:
                wanted = symbols()
                if wanted:
                    result = await asyncio.to_thread(self._quotes.get_quotes, wanted)
                    if not result.ok:
                        logger.warning("Portfolio refresh failed: %s", result.error.reason)
            except Exception:
                logger.exception("Portfolio refresh failed")
            await asyncio.sleep(interval)
