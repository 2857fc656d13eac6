"""
Tracing for Stockie chat turns.

LangfuseObservabilityHandler records every classify -> act | respond graph run
as a Langfuse trace; RunAssistantTurnUseCase tags it with the chat user and
session ids. Bootstrap picks NullObservabilityHandler when no
LANGFUSE_PUBLIC_KEY is configured, so turns run untraced.

The langfuse imports stay inside the methods: the keys may only reach the
environment after SecretsManagerAdapter.load_into_env() has run at startup.
"""

from typing import Any

from marketminds.domain.ports.observability_port import IObservabilityHandler


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Langfuse CallbackHandler attached to each assistant graph run."""

    def __init__(self) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()

    def as_callback(self) -> Any:
        """Return the Langfuse CallbackHandler for use in LangGraph configs."""
        return self._handler

    def flush(self) -> None:
        """Push pending traces to the Langfuse backend."""
        from langfuse import get_client
        get_client().flush()


class NullObservabilityHandler(IObservabilityHandler):
    """Turns run untraced; flush is a no-op."""

    def as_callback(self) -> Any | None:
        return None

    def flush(self) -> None:
        pass
