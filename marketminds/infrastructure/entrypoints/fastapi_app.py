"""
FastAPI entry point — dashboard data, chat sessions and the user workspace.

Every route delegates to a use case built by the Composition Root
(bootstrap.build_services). Blocking provider calls run in FastAPI's
threadpool (plain `def` routes); the chat turn is async.

Run locally:
    uvicorn marketminds.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Query

from marketminds.infrastructure.entrypoints.bootstrap import Services, build_services, load_settings
from marketminds.infrastructure.entrypoints.error_handlers import register_error_handlers
from marketminds.infrastructure.entrypoints.schemas import (
    CategoryResponse,
    ErrorResponse,
    HistoryResponseSchema,
    MessageSchema,
    NewsResponseSchema,
    PortfolioResponse,
    PositionRequest,
    QuoteListResponse,
    QuoteSchema,
    SendMessageRequest,
    TurnResponse,
    WatchlistRequest,
    WatchlistResponse,
)
from marketminds.infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)

NOT_FOUND = {404: {"model": ErrorResponse}}


def create_app(services: Optional[Services] = None, start_polling: bool = True) -> FastAPI:
    """Build the app; tests pass pre-wired *services* and usually disable polling."""
    if services is None:
        settings = load_settings()
        configure_logging(settings.log_level)
        services = build_services(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        tasks: list[asyncio.Task] = []
        if start_polling:
            tasks = services.market_store.start()
            tasks.append(
                asyncio.create_task(
                    services.value_portfolio.poll(
                        services.workspaces.all_symbols,
                        services.settings.portfolio_poll_seconds,
                    ),
                    name="poll-portfolio",
                )
            )
        yield
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        services.observability.flush()

    app = FastAPI(
        title="MarketMinds API",
        lifespan=lifespan,
        responses={500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    )
    app.state.services = services
    register_error_handlers(app)

    # -- market data ---------------------------------------------------------

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/quotes", response_model=QuoteListResponse)
    def get_quotes(symbols: str = Query(..., description="Comma-separated display symbols")):
        return services.get_quotes.execute(symbols.split(","))

    @app.get("/markets/{category}", response_model=CategoryResponse, responses=NOT_FOUND)
    def get_market_category(category: str):
        quotes = services.get_category.execute(category)
        return CategoryResponse(
            category=services.market_store.active_category,
            data=[QuoteSchema.model_validate(q) for q in quotes],
        )

    @app.get("/search", response_model=QuoteSchema, responses=NOT_FOUND)
    def search(q: str = Query(..., min_length=1, max_length=64)):
        return services.search.execute(q)

    @app.get("/history/{symbol:path}", response_model=HistoryResponseSchema)
    def get_history(symbol: str, time_range: str = Query("1D", alias="range")):
        return services.get_history.execute(symbol, time_range)

    @app.get("/news", response_model=NewsResponseSchema)
    def get_news(limit: int = Query(5, ge=1, le=20)):
        return services.get_news.execute(limit)

    # -- chat ----------------------------------------------------------------

    @app.get("/sessions/{user_id}/messages", response_model=list[MessageSchema])
    def list_messages(user_id: str):
        return services.conversations.history(user_id)

    @app.post("/sessions/{user_id}/messages", response_model=TurnResponse)
    async def send_message(user_id: str, body: SendMessageRequest):
        return await services.run_turn.execute(user_id, body.message, session_id=body.session_id)

    @app.delete("/sessions/{user_id}/messages", response_model=list[MessageSchema])
    def reset_messages(user_id: str):
        return services.run_turn.reset(user_id)

    # -- workspace -----------------------------------------------------------

    @app.get("/users/{user_id}/watchlist", response_model=WatchlistResponse)
    def get_watchlist(user_id: str):
        return WatchlistResponse(watchlist=services.workspaces.get(user_id).watchlist)

    @app.post("/users/{user_id}/watchlist", response_model=WatchlistResponse)
    def add_to_watchlist(user_id: str, body: WatchlistRequest):
        workspace = services.workspaces.get(user_id)
        workspace.add_to_watchlist(body.symbol)
        return WatchlistResponse(watchlist=workspace.watchlist)

    @app.delete("/users/{user_id}/watchlist/{symbol:path}", response_model=WatchlistResponse)
    def remove_from_watchlist(user_id: str, symbol: str):
        workspace = services.workspaces.get(user_id)
        workspace.remove_from_watchlist(symbol)
        return WatchlistResponse(watchlist=workspace.watchlist)

    @app.get("/users/{user_id}/portfolio", response_model=PortfolioResponse)
    def get_portfolio(user_id: str):
        return services.value_portfolio.execute(services.workspaces.get(user_id).portfolio)

    @app.post("/users/{user_id}/portfolio", response_model=PortfolioResponse)
    def add_position(user_id: str, body: PositionRequest):
        workspace = services.workspaces.get(user_id)
        workspace.add_to_portfolio(body.symbol, body.quantity)
        return services.value_portfolio.execute(workspace.portfolio)

    return app


app = create_app()
