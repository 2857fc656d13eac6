"""
Use-case: host-owned watchlist and portfolio for each user.
Depends only on Domain ports and entities — no infrastructure imports.

The workspace is the state the assistant mutates through
AssistantCapabilities callbacks; it lives in memory for the process
lifetime.
"""

import logging
from dataclasses import dataclass, field

from marketminds.domain.entities.portfolio import AssistantCapabilities, PortfolioPosition
from marketminds.domain.errors import InvalidQuantityError

logger = logging.getLogger(__name__)

DEFAULT_WATCHLIST = ("AAPL", "TSLA", "NVDA", "MSFT", "AMZN")
DEFAULT_PORTFOLIO = (("AAPL", 10.0), ("NVDA", 5.0), ("MSFT", 8.0))


def _clean(symbol: str) -> str:
    cleaned = (symbol or "").strip().upper()
    if not cleaned:
        raise ValueError("symbol must be a non-empty string")
    return cleaned


@dataclass
class WorkspaceState:
    watchlist: list[str] = field(default_factory=lambda: list(DEFAULT_WATCHLIST))
    portfolio: list[PortfolioPosition] = field(
        default_factory=lambda: [PortfolioPosition(s, q) for s, q in DEFAULT_PORTFOLIO]
    )

    def add_to_watchlist(self, symbol: str) -> None:
        symbol = _clean(symbol)
        if symbol not in self.watchlist:
            self.watchlist.append(symbol)

    def remove_from_watchlist(self, symbol: str) -> None:
        symbol = _clean(symbol)
        self.watchlist = [s for s in self.watchlist if s != symbol]

    def add_to_portfolio(self, symbol: str, quantity: float) -> None:
        """Add *quantity* shares, merging into an existing position.

        Raises:
            InvalidQuantityError: if *quantity* is not greater than 0.
        """
        symbol = _clean(symbol)
        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        for i, position in enumerate(self.portfolio):
            if position.symbol == symbol:
                self.portfolio[i] = PortfolioPosition(symbol, position.quantity + quantity)
                return
        self.portfolio.append(PortfolioPosition(symbol, quantity))

    def symbols(self) -> list[str]:
        seen = dict.fromkeys(self.watchlist)
        seen.update(dict.fromkeys(p.symbol for p in self.portfolio))
        return list(seen)

    def capabilities(self) -> AssistantCapabilities:
        """Snapshot plus callbacks bound to this workspace."""
        return AssistantCapabilities(
            watchlist=tuple(self.watchlist),
            portfolio=tuple(self.portfolio),
            add_to_watchlist=self.add_to_watchlist,
            remove_from_watchlist=self.remove_from_watchlist,
            add_to_portfolio=self.add_to_portfolio,
        )


class WorkspaceRegistry:
    def __init__(self) -> None:
        self._workspaces: dict[str, WorkspaceState] = {}

    def get(self, user_id: str) -> WorkspaceState:
        workspace = self._workspaces.get(user_id)
        if workspace is None:
            logger.info("Creating default workspace for user %s", user_id)
            workspace = WorkspaceState()
            self._workspaces[user_id] = workspace
        return workspace

    def all_symbols(self) -> list[str]:
        seen: dict[str, None] = {}
        for workspace in list(self._workspaces.values()):
            seen.update(dict.fromkeys(workspace.symbols()))
        return list(seen)
