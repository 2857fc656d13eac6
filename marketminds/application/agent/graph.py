"""
LangGraph assistant graph factory.

Dependency-injection contract:
  - Receives the IntentRouter, ActionExecutor and AnalysisEngine; never
    imports yfinance, httpx, langfuse or boto3 directly.
  - Host capabilities (watchlist/portfolio callbacks) arrive per run through
    config["configurable"]["capabilities"], so one compiled graph serves
    every user.
  - langchain_core and langgraph are treated as orchestration-framework imports,
    acceptable in the application layer.
"""

import logging

from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph

from marketminds.application.agent.state import AssistantState
from marketminds.application.assistant.actions import ActionExecutor
from marketminds.application.assistant.analysis_engine import AnalysisEngine
from marketminds.application.assistant.router import IntentRouter
from marketminds.domain.entities.conversation import ConversationContext
from marketminds.domain.entities.intent import ActionCommand, DynamicAnalysis
from marketminds.domain.entities.portfolio import AssistantCapabilities

logger = logging.getLogger(__name__)


def _capabilities(config: RunnableConfig | None) -> AssistantCapabilities | None:
    return ((config or {}).get("configurable") or {}).get("capabilities")


def _last_user_text(state: AssistantState) -> str:
    return state["messages"][-1].content if state.get("messages") else ""


def build_assistant_graph(router: IntentRouter, actions: ActionExecutor, engine: AnalysisEngine):
    """Build and compile the per-turn assistant graph.

    Args:
        router:  IntentRouter used by the classify node.
        actions: ActionExecutor used by the act node.
        engine:  AnalysisEngine used by the respond node (one per chat session).

    Returns:
        Compiled LangGraph CompiledStateGraph ready for invoke()/ainvoke() calls.
    """

    def classify_node(state: AssistantState, config: RunnableConfig) -> dict:
        """Routing step: tag the user message with an Intent."""
        context = state.get("context") or ConversationContext()
        intent = router.classify(_last_user_text(state), context, _capabilities(config))
        logger.debug("Classified message as %s", type(intent).__name__)
        return {"intent": intent, "context": context}

    def act_node(state: AssistantState, config: RunnableConfig) -> dict:
        """Action step: run the matched command against the host callbacks."""
        caps = _capabilities(config) or AssistantCapabilities()
        reply = actions.execute(state["intent"], _last_user_text(state), caps)
        if reply is None:
            return {"reply": None}
        return {"reply": reply, "messages": [AIMessage(content=reply)]}

    def respond_node(state: AssistantState, config: RunnableConfig) -> dict:
        """Analysis step: render the reply and carry the updated context forward."""
        message = _last_user_text(state)
        context = state.get("context") or ConversationContext()
        intent = state["intent"]
        if isinstance(intent, ActionCommand):
            # act declined; re-route with every mutating template disabled
            intent = router.classify(message, context, AssistantCapabilities())
        if isinstance(intent, ActionCommand):
            # only the read-only show templates survive the re-route
            caps = _capabilities(config) or AssistantCapabilities()
            reply = actions.execute(intent, message, caps)
            if reply is not None:
                return {"reply": reply, "context": context, "messages": [AIMessage(content=reply)]}
            intent = DynamicAnalysis()
        reply, context = engine.respond(intent, message, context, _capabilities(config))
        return {"reply": reply, "context": context, "messages": [AIMessage(content=reply)]}

    def route_intent(state: AssistantState) -> str:
        return "act_node" if isinstance(state["intent"], ActionCommand) else "respond_node"

    def after_action(state: AssistantState) -> str:
        return END if state.get("reply") is not None else "respond_node"

    workflow = StateGraph(AssistantState)
    workflow.add_node("classify_node", classify_node)
    workflow.add_node("act_node", act_node)
    workflow.add_node("respond_node", respond_node)
    workflow.add_edge(START, "classify_node")
    workflow.add_conditional_edges("classify_node", route_intent, ["act_node", "respond_node"])
    workflow.add_conditional_edges("act_node", after_action, ["respond_node", END])
    workflow.add_edge("respond_node", END)
    return workflow.compile()
