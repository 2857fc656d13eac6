"""
Domain entities for host-owned watchlist/portfolio state and the callbacks
the assistant uses to request changes to it.
Zero external dependencies — pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass(frozen=True)
class PortfolioPosition:
    symbol: str
    quantity: float


@dataclass(frozen=True)
class AssistantCapabilities:
    """Mutation callbacks and read-only snapshots supplied by the host.

    A missing callback disables the matching action template, which then
    falls through to analysis.
    """

    watchlist: tuple[str, ...] = ()
    portfolio: tuple[PortfolioPosition, ...] = ()
    add_to_watchlist: Optional[Callable[[str], None]] = None
    remove_from_watchlist: Optional[Callable[[str], None]] = None
    add_to_portfolio: Optional[Callable[[str, float], None]] = None

    def holdings(self) -> dict[str, float]:
        """Aggregate quantity per symbol (positions may repeat a symbol)."""
        totals: dict[str, float] = {}
        for position in self.portfolio:
            totals[position.symbol] = totals.get(position.symbol, 0.0) + position.quantity
        return totals


@dataclass(frozen=True)
class PositionValuation:
    symbol: str
    quantity: float
    price: float
    value: float
    allocation: float


@dataclass(frozen=True)
class PortfolioValuation:
    total_value: float
    positions: list[PositionValuation] = field(default_factory=list)
    largest: Optional[PositionValuation] = None
    concentration: str = ""
