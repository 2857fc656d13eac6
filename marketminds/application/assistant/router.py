"""
Intent router: classifies one chat message into a tagged Intent.

Rules are evaluated in the order of IntentRouter.rules and the first rule
returning an intent wins. The order is part of the contract:

  1. help           - under 5 characters or a bare acknowledgement
  2. clarify        - an action verb with no object ("make it")
  3. action         - any action-executor template
  4. goal           - amount + target verb + currency, or a follow-up
                      amount when a goal is already in context
  5. strategy       - portfolio-creation verbs or theme keywords
  6. knowledge      - FAQ phrasing combined with a topic keyword
  7. tickers        - 3-5 letter upper-case tokens minus STOP_WORDS
  8. topical        - market / opportunities / risk / crypto / tech buckets
  9. dynamic        - always matches

Classification is side-effect free.
"""

import re
from typing import Callable, Optional

from marketminds.application.assistant import knowledge, strategy
from marketminds.application.assistant.actions import ActionExecutor
from marketminds.application.assistant.vocabulary import FILLER_WORDS, STOP_WORDS, TOPICAL_BUCKETS
from marketminds.domain.entities.conversation import ConversationContext
from marketminds.domain.entities.intent import (
    CompareStocks,
    DynamicAnalysis,
    Help,
    Intent,
    InvestmentGoal,
    Knowledge,
    NeedsClarification,
    SingleStockAnalysis,
    StrategyQuery,
    Topical,
)
from marketminds.domain.entities.portfolio import AssistantCapabilities

MAX_COMPARE = 4

_CLARIFY = re.compile(r"^(make|do|create|build|show|get)\s*(it|this|that|one|some)?\.?$", re.I)
_HAS_NUMBER = re.compile(r"\d+")
_GOAL_TARGET = re.compile(
    r"(into|make|become|get|reach|turn.*into|want.*to be|goal|double|triple|quadruple|\b\d+x\b)", re.I
)
_MONEY_WORDS = ("euro", "dollar", "€", "$")
_FOLLOW_UP = re.compile(r"^(what about|how about|what if|and with)\b.*\d", re.I)
_TICKER = re.compile(r"\b([A-Z]{3,5})\b")
_COMPARE = re.compile(r"(compare|\bvs\b)", re.I)


def extract_tickers(message: str) -> list[str]:
    """Candidate symbols in first-seen order; never returns a STOP_WORDS entry."""
    tokens = _TICKER.findall((message or "").upper())
    return list(dict.fromkeys(t for t in tokens if t not in STOP_WORDS))


def is_goal_query(message: str, context: ConversationContext | None = None) -> bool:
    text = message.lower()
    if context is not None and context.has_goal and _FOLLOW_UP.search(text):
        return True
    has_money = any(word in text for word in _MONEY_WORDS)
    return bool(_HAS_NUMBER.search(text) and _GOAL_TARGET.search(text) and has_money)


Rule = Callable[[str, str, ConversationContext, Optional[AssistantCapabilities]], Optional[Intent]]


class IntentRouter:
    def __init__(self, actions: ActionExecutor | None = None) -> None:
        self._actions = actions or ActionExecutor()
        self.rules: list[tuple[str, Rule]] = [
            ("help", self._help),
            ("clarify", self._clarify),
            ("action", self._action),
            ("goal", self._goal),
            ("strategy", self._strategy),
            ("knowledge", self._knowledge),
            ("tickers", self._tickers),
            ("topical", self._topical),
            ("dynamic", self._dynamic),
        ]

    def classify(
        self,
        message: str,
        context: ConversationContext | None = None,
        capabilities: AssistantCapabilities | None = None,
    ) -> Intent:
        raw = message or ""
        text = raw.lower().strip()
        context = context or ConversationContext()
        for _name, rule in self.rules:
            intent = rule(raw, text, context, capabilities)
            if intent is not None:
                return intent
        return DynamicAnalysis()

    def _help(self, raw, text, context, capabilities):
        if len(text) < 5 or text in FILLER_WORDS:
            return Help()
        return None

    def _clarify(self, raw, text, context, capabilities):
        return NeedsClarification() if _CLARIFY.match(text) else None

    def _action(self, raw, text, context, capabilities):
        return self._actions.parse(raw, capabilities)

    def _goal(self, raw, text, context, capabilities):
        return InvestmentGoal() if is_goal_query(text, context) else None

    def _strategy(self, raw, text, context, capabilities):
        if strategy.is_strategy_request(text):
            return StrategyQuery(strategy.detect_themes(text))
        return None

    def _knowledge(self, raw, text, context, capabilities):
        topic = knowledge.match_topic(text)
        return Knowledge(topic) if topic else None

    def _tickers(self, raw, text, context, capabilities):
        symbols = extract_tickers(raw)
        if len(symbols) == 1:
            return SingleStockAnalysis(symbols[0])
        if len(symbols) >= 2 or _COMPARE.search(text):
            return CompareStocks(tuple(symbols[:MAX_COMPARE]))
        return None

    def _topical(self, raw, text, context, capabilities):
        for tag, pattern in TOPICAL_BUCKETS:
            if pattern.search(text):
                return Topical(tag)
        return None

    def _dynamic(self, raw, text, context, capabilities):
        return DynamicAnalysis()
