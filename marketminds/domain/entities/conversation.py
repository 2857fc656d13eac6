"""
Domain entities for the assistant conversation.
Zero external dependencies — pure Python dataclasses only.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Literal

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Message:
    role: Role
    content: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_record(self) -> dict:
        """Serialize to the persisted layout {id, role, content, timestamp ISO}."""
        return {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Message":
        return cls(
            id=str(record["id"]),
            role=record["role"],
            content=record["content"],
            timestamp=datetime.fromisoformat(record["timestamp"]),
        )


@dataclass(frozen=True)
class ConversationContext:
    """Rolling memory of the last investment goal mentioned in a chat session.

    last_amount / last_target are 0 until a goal question has been answered.
    Updated functionally: every turn returns a new context.
    """

    last_amount: float = 0.0
    last_target: float = 0.0

    @property
    def has_goal(self) -> bool:
        return self.last_amount > 0 and self.last_target > 0

    def remember(self, amount: float, target: float) -> "ConversationContext":
        return replace(self, last_amount=amount, last_target=target)
