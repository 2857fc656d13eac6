"""
Infrastructure adapter: one JSON file per key → IMessageStore.

Keys such as "stockie_messages_v1:alice" are turned into safe file names.
A file that cannot be decoded is reported as "nothing stored" so the
conversation falls back to the welcome message.
"""

import json
import logging
import re
from pathlib import Path

from marketminds.domain.ports.message_store_port import IMessageStore

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileMessageStore(IMessageStore):
    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._dir / f"{_UNSAFE.sub('_', key)}.json"

    def load(self, key: str) -> list[dict] | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            records = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read transcript file %s: %s", path.name, exc)
            return None
        return records if isinstance(records, list) else None

    def save(self, key: str, records: list[dict]) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)

    def clear(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
