"""
Assistant facade: one compiled turn graph bound to one AnalysisEngine.
Hosts call classify_and_respond() (or its async twin) once per chat turn.
"""

from datetime import date
from typing import Any, Callable

from langchain_core.messages import HumanMessage

from marketminds.application.agent.graph import build_assistant_graph
from marketminds.application.assistant.actions import ActionExecutor
from marketminds.application.assistant.analysis_engine import AnalysisEngine
from marketminds.application.assistant.router import IntentRouter
from marketminds.application.market.quote_service import QuoteService
from marketminds.domain.entities.conversation import ConversationContext
from marketminds.domain.entities.portfolio import AssistantCapabilities


class Assistant:
    def __init__(self, graph: Any, actions: ActionExecutor, engine: AnalysisEngine) -> None:
        self._graph = graph
        self._actions = actions
        self.engine = engine

    @staticmethod
    def _inputs(message: str, context: ConversationContext) -> dict:
        return {"messages": [HumanMessage(content=message)], "context": context, "reply": None}

    @staticmethod
    def _config(capabilities: AssistantCapabilities | None, config: dict | None) -> dict:
        merged = dict(config or {})
        merged["configurable"] = {**merged.get("configurable", {}), "capabilities": capabilities}
        return merged

    def classify_and_respond(
        self,
        message: str,
        context: ConversationContext,
        capabilities: AssistantCapabilities | None = None,
        config: dict | None = None,
    ) -> tuple[str, ConversationContext]:
        """Run one turn; returns the Markdown reply and the updated context."""
        result = self._graph.invoke(self._inputs(message, context), config=self._config(capabilities, config))
        return result["reply"], result["context"]

    async def aclassify_and_respond(
        self,
        message: str,
        context: ConversationContext,
        capabilities: AssistantCapabilities | None = None,
        config: dict | None = None,
    ) -> tuple[str, ConversationContext]:
        result = await self._graph.ainvoke(
            self._inputs(message, context), config=self._config(capabilities, config)
        )
        return result["reply"], result["context"]

    def try_execute_action(self, message: str, capabilities: AssistantCapabilities) -> str | None:
        return self._actions.try_execute(message, capabilities)


def build_assistant(
    quote_service: QuoteService,
    today: Callable[[], date] = date.today,
) -> Assistant:
    """Wire router, executor and a fresh engine into a compiled graph."""
    actions = ActionExecutor(today=today)
    router = IntentRouter(actions)
    engine = AnalysisEngine(quote_service, today=today)
    graph = build_assistant_graph(router, actions, engine)
    return Assistant(graph, actions, engine)
