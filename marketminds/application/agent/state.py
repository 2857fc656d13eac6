"""
LangGraph state for one assistant turn.
langgraph is the orchestration framework and is allowed in the application layer.
"""

from typing import Annotated, Any, Optional, TypedDict

from langgraph.graph.message import add_messages

from marketminds.domain.entities.conversation import ConversationContext


class AssistantState(TypedDict, total=False):
    """Shared state threaded through classify -> act | respond.

    messages: the turn's user message plus the reply, managed by the
              add_messages reducer.
    context:  ConversationContext going in; the updated context coming out.
    intent:   tagged Intent chosen by the router.
    reply:    final Markdown reply, None until a node produces one.
    """

    messages: Annotated[list, add_messages]
    context: ConversationContext
    intent: Any
    reply: Optional[str]
