"""
Use-case: chat transcript lifecycle (restore, append, reset).
Depends only on Domain ports and entities — no infrastructure imports.

The transcript is persisted after every mutation as a list of
{id, role, content, timestamp} records under a per-user key. A missing or
unreadable transcript is replaced by the single welcome message.
"""

import logging
from datetime import datetime, timezone

from marketminds.application.assistant import replies
from marketminds.domain.entities.conversation import Message, Role
from marketminds.domain.ports.message_store_port import IMessageStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "stockie_messages_v1"


def storage_key(user_id: str) -> str:
    return f"{STORAGE_KEY}:{user_id}"


def welcome_message() -> Message:
    return Message(
        id=replies.WELCOME_MESSAGE_ID,
        role="assistant",
        content=replies.WELCOME_TEXT,
        timestamp=datetime.now(timezone.utc),
    )


class ConversationService:
    def __init__(self, store: IMessageStore) -> None:
        self._store = store

    def history(self, user_id: str) -> list[Message]:
        """Restore the transcript, falling back to the welcome message."""
        key = storage_key(user_id)
        records = self._store.load(key)
        if not records:
            return [welcome_message()]
        try:
            return [Message.from_record(record) for record in records]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Discarding unreadable transcript %s: %s", key, exc)
            return [welcome_message()]

    def append(self, user_id: str, role: Role, content: str) -> Message:
        """Append one message and persist the whole transcript."""
        message = Message(role=role, content=content)
        transcript = self.history(user_id) + [message]
        self._store.save(storage_key(user_id), [m.to_record() for m in transcript])
        return message

    def reset(self, user_id: str) -> list[Message]:
        """Clear storage and reinstall the welcome message."""
        key = storage_key(user_id)
        self._store.clear(key)
        transcript = [welcome_message()]
        self._store.save(key, [m.to_record() for m in transcript])
        logger.info("Conversation reset for user %s", user_id)
        return transcript
