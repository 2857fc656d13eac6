"""
Infrastructure adapter: process-local dict → IMessageStore.
Used by the terminal host, tests, and whenever MESSAGE_STORE_DIR is unset.
"""

import copy

from marketminds.domain.ports.message_store_port import IMessageStore


class InMemoryMessageStore(IMessageStore):
    def __init__(self) -> None:
        self._data: dict[str, list[dict]] = {}

    def load(self, key: str) -> list[dict] | None:
        records = self._data.get(key)
        return copy.deepcopy(records) if records is not None else None

    def save(self, key: str, records: list[dict]) -> None:
        self._data[key] = copy.deepcopy(records)

    def clear(self, key: str) -> None:
        self._data.pop(key, None)
