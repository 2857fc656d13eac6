"""
Port (interface) for the host's key/value transcript storage.
Infrastructure adapters (e.g. JsonFileMessageStore) must implement this interface.
"""

from abc import ABC, abstractmethod


class IMessageStore(ABC):
    @abstractmethod
    def load(self, key: str) -> list[dict] | None:
        """Return the stored message records for *key*, or None when nothing is stored."""
        ...

    @abstractmethod
    def save(self, key: str, records: list[dict]) -> None:
        """Replace the stored records for *key*."""
        ...

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove *key*; a missing key is not an error."""
        ...
