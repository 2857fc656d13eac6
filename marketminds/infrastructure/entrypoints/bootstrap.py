"""
Composition Root shared by the HTTP app and the terminal REPL: wires all
infrastructure adapters once and hands them to the application layer.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from marketminds.application.assistant.assistant import build_assistant
from marketminds.application.assistant.sessions import SessionRegistry
from marketminds.application.market.market_data_store import MarketDataStore
from marketminds.application.market.quote_service import QuoteService
from marketminds.application.use_cases.get_history import GetHistoryUseCase
from marketminds.application.use_cases.get_news import GetNewsUseCase
from marketminds.application.use_cases.get_quotes import (
    GetMarketCategoryUseCase,
    GetQuotesUseCase,
    SearchSymbolUseCase,
)
from marketminds.application.use_cases.manage_conversation import ConversationService
from marketminds.application.use_cases.manage_workspace import WorkspaceRegistry
from marketminds.application.use_cases.run_assistant_turn import RunAssistantTurnUseCase
from marketminds.application.use_cases.value_portfolio import ValuePortfolioUseCase
from marketminds.domain.ports.market_data_port import IMarketDataProvider
from marketminds.domain.ports.message_store_port import IMessageStore
from marketminds.domain.ports.observability_port import IObservabilityHandler
from marketminds.infrastructure.config import Settings
from marketminds.infrastructure.market_data.rss_news import CompositeMarketDataProvider, RssNewsFeed
from marketminds.infrastructure.market_data.yfinance_adapter import YFinanceMarketDataProvider
from marketminds.infrastructure.observability.langfuse_adapter import (
    LangfuseObservabilityHandler,
    NullObservabilityHandler,
)
from marketminds.infrastructure.persistence.in_memory_message_store import InMemoryMessageStore
from marketminds.infrastructure.persistence.json_message_store import JsonFileMessageStore
from marketminds.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    quote_service: QuoteService
    market_store: MarketDataStore
    workspaces: WorkspaceRegistry
    conversations: ConversationService
    run_turn: RunAssistantTurnUseCase
    get_quotes: GetQuotesUseCase
    get_category: GetMarketCategoryUseCase
    search: SearchSymbolUseCase
    get_history: GetHistoryUseCase
    get_news: GetNewsUseCase
    value_portfolio: ValuePortfolioUseCase
    observability: IObservabilityHandler


def load_settings() -> Settings:
    """Read settings, pulling LANGFUSE_* keys from Secrets Manager when an ARN is configured."""
    settings = Settings.from_env()
    if settings.langfuse_secret_arn:
        SecretsManagerAdapter(region=settings.aws_region).load_into_env(settings.langfuse_secret_arn)
        settings = settings.refreshed()
    return settings


def build_observability(settings: Settings) -> IObservabilityHandler:
    if settings.tracing_enabled:
        logger.info("Langfuse tracing enabled")
        return LangfuseObservabilityHandler()
    return NullObservabilityHandler()


def build_services(
    settings: Settings,
    provider: Optional[IMarketDataProvider] = None,
    store: Optional[IMessageStore] = None,
    observability: Optional[IObservabilityHandler] = None,
) -> Services:
    """Wire everything; any argument left as None gets its production adapter."""
    if provider is None:
        provider = CompositeMarketDataProvider(
            YFinanceMarketDataProvider(),
            RssNewsFeed(settings.news_feed_url, timeout=settings.http_timeout),
        )
    if store is None:
        store = (
            JsonFileMessageStore(settings.message_store_dir)
            if settings.message_store_dir
            else InMemoryMessageStore()
        )
    if observability is None:
        observability = build_observability(settings)

    quote_service = QuoteService(provider, ttl=settings.quote_cache_ttl)
    workspaces = WorkspaceRegistry()
    conversations = ConversationService(store)
    sessions = SessionRegistry(lambda: build_assistant(quote_service))
    market_store = MarketDataStore(
        quote_service,
        quote_interval=settings.quote_poll_seconds,
        news_interval=settings.news_poll_seconds,
    )

    return Services(
        settings=settings,
        quote_service=quote_service,
        market_store=market_store,
        workspaces=workspaces,
        conversations=conversations,
        run_turn=RunAssistantTurnUseCase(sessions, conversations, workspaces, observability),
        get_quotes=GetQuotesUseCase(quote_service),
        get_category=GetMarketCategoryUseCase(market_store),
        search=SearchSymbolUseCase(quote_service),
        get_history=GetHistoryUseCase(quote_service),
        get_news=GetNewsUseCase(quote_service),
        value_portfolio=ValuePortfolioUseCase(quote_service),
        observability=observability,
    )
