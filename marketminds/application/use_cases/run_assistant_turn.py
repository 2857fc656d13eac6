"""
Use-case: run one chat turn through the user's assistant session.
langchain_core / LangGraph are treated as framework (not infrastructure);
tracing goes through the IObservabilityHandler port.

Any unexpected failure inside the turn is logged with its traceback and
answered with the fixed "Connection Issue" reply, so the transcript always
gains exactly one user and one assistant message.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from marketminds.application.assistant import replies
from marketminds.application.assistant.sessions import SessionRegistry
from marketminds.application.use_cases.manage_conversation import ConversationService
from marketminds.application.use_cases.manage_workspace import WorkspaceRegistry
from marketminds.domain.entities.conversation import Message
from marketminds.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnResult:
    user_message: Message
    reply: Message
    failed: bool = False


class RunAssistantTurnUseCase:
    def __init__(
        self,
        sessions: SessionRegistry,
        conversations: ConversationService,
        workspaces: WorkspaceRegistry,
        observability: IObservabilityHandler,
    ) -> None:
        """
        Args:
            sessions:      Per-user assistant sessions (engine + rolling context).
            conversations: Transcript persistence.
            workspaces:    Host watchlist/portfolio handed to the action executor.
            observability: IObservabilityHandler implementation (e.g. Langfuse adapter).
        """
        self._sessions = sessions
        self._conversations = conversations
        self._workspaces = workspaces
        self._observability = observability

    def _config(self, user_id: str, session_id: Optional[str]) -> dict:
        callback = self._observability.as_callback()
        return {
            "callbacks": [callback] if callback is not None else [],
            "metadata": {
                "langfuse_user_id": user_id,
                "langfuse_session_id": session_id or user_id,
                "langfuse_tags": ["stockie"],
            },
            "recursion_limit": 10,
        }

    async def execute(
        self,
        user_id: str,
        message: str,
        session_id: Optional[str] = None,
    ) -> TurnResult:
        """Append the user message, answer it and persist the reply.

        Raises:
            ValueError: if *message* is blank.
        """
        if not message or not message.strip():
            raise ValueError("message must be a non-empty string")

        user_message = self._conversations.append(user_id, "user", message)
        session = self._sessions.get(user_id)
        capabilities = self._workspaces.get(user_id).capabilities()

        failed = False
        try:
            text, context = await session.assistant.aclassify_and_respond(
                message,
                session.context,
                capabilities=capabilities,
                config=self._config(user_id, session_id),
            )
            session.context = context
        except Exception:
            logger.exception("Assistant turn failed for user %s", user_id)
            text = replies.fallback_text()
            failed = True
        finally:
            self._observability.flush()

        reply = self._conversations.append(user_id, "assistant", text)
        return TurnResult(user_message=user_message, reply=reply, failed=failed)

    def reset(self, user_id: str) -> list[Message]:
        """Forget the session context and restore the welcome-only transcript."""
        self._sessions.reset(user_id)
        return self._conversations.reset(user_id)
