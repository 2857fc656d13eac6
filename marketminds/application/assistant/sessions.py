"""
Per-user chat sessions.

A ChatSession owns one Assistant (and so one AnalysisEngine with its quote
snapshot and history cache) plus the rolling ConversationContext. Sessions
live for the process lifetime and are never persisted; only the transcript
survives a restart.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from marketminds.application.assistant.assistant import Assistant
from marketminds.domain.entities.conversation import ConversationContext

logger = logging.getLogger(__name__)


@dataclass
class ChatSession:
    assistant: Assistant
    context: ConversationContext = field(default_factory=ConversationContext)


class SessionRegistry:
    def __init__(self, assistant_factory: Callable[[], Assistant]) -> None:
        self._factory = assistant_factory
        self._sessions: dict[str, ChatSession] = {}

    def get(self, user_id: str) -> ChatSession:
        session = self._sessions.get(user_id)
        if session is None:
            logger.info("Starting chat session for user %s", user_id)
            session = ChatSession(assistant=self._factory())
            self._sessions[user_id] = session
        return session

    def reset(self, user_id: str) -> None:
        """Drop the session so the next turn starts with an empty context and cache."""
        self._sessions.pop(user_id, None)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._sessions
