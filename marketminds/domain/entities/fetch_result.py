"""
Explicit success/failure wrapper returned by the quote service.
Callers decide how to degrade (usually: keep using cached data) instead of
relying on exceptions being swallowed somewhere below them.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from marketminds.domain.errors import FetchError

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    value: T
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: FetchError, fallback: T) -> "FetchResult[T]":
        """Wrap *error* while still carrying a usable (possibly stale or empty) value."""
        return cls(value=fallback, error=error)
