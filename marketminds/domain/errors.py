"""
Domain-specific errors.

All errors raised from the domain and application layers are defined here
and mapped to HTTP responses by the FastAPI entrypoint. No framework
imports allowed.
"""


class MarketMindsError(Exception):
    """Base error for all MarketMinds domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class MarketDataError(MarketMindsError):
    """Raised by market data adapters when the provider call fails."""


class FetchError(MarketMindsError):
    """Describes a failed fetch carried inside a FetchResult (not raised by the service)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


class SymbolNotFoundError(MarketMindsError):
    """Raised when a symbol lookup returns no quote."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Symbol not found: {symbol}")
        self.symbol = symbol


class InvalidTimeRangeError(MarketMindsError):
    """Raised when a history range is not one of 1D, 1W, 1M, 1Y, 5Y, MAX."""

    def __init__(self, time_range: str) -> None:
        super().__init__(
            f"Invalid time range: {time_range!r}. Must be one of 1D, 1W, 1M, 1Y, 5Y, MAX."
        )
        self.time_range = time_range


class InvalidQuantityError(MarketMindsError):
    """Raised when a portfolio position is given a non-positive quantity."""

    def __init__(self, quantity: float) -> None:
        super().__init__(f"Invalid quantity: {quantity}. Must be greater than 0.")
        self.quantity = quantity


class UnknownCategoryError(MarketMindsError):
    """Raised when a dashboard category name is not in the market catalog."""

    def __init__(self, category: str) -> None:
        super().__init__(f"Unknown market category: {category!r}")
        self.category = category
