"""
Maps domain errors to JSON HTTP responses.
No stack traces or internal details are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from marketminds.domain.errors import (
    InvalidQuantityError,
    InvalidTimeRangeError,
    MarketDataError,
    MarketMindsError,
    SymbolNotFoundError,
    UnknownCategoryError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SymbolNotFoundError)
    async def handle_symbol_not_found(_request: Request, exc: SymbolNotFoundError) -> JSONResponse:
        logger.info("Symbol not found: %s", exc.symbol)
        return _error_response(404, "Symbol not found", exc.symbol)

    @app.exception_handler(UnknownCategoryError)
    async def handle_unknown_category(_request: Request, exc: UnknownCategoryError) -> JSONResponse:
        return _error_response(404, "Unknown market category", exc.category)

    @app.exception_handler(InvalidTimeRangeError)
    async def handle_invalid_range(_request: Request, exc: InvalidTimeRangeError) -> JSONResponse:
        return _error_response(422, "Invalid time range", exc.message)

    @app.exception_handler(InvalidQuantityError)
    async def handle_invalid_quantity(_request: Request, exc: InvalidQuantityError) -> JSONResponse:
        return _error_response(422, "Invalid quantity", exc.message)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError) -> JSONResponse:
        return _error_response(422, "Invalid request", str(exc))

    @app.exception_handler(MarketDataError)
    async def handle_market_data(_request: Request, exc: MarketDataError) -> JSONResponse:
        logger.warning("Market data unavailable: %s", exc.message)
        return _error_response(503, "Market data unavailable")

    @app.exception_handler(MarketMindsError)
    async def handle_domain(_request: Request, exc: MarketMindsError) -> JSONResponse:
        logger.error("Unhandled domain error: %s", exc.message)
        return _error_response(500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(500, "Internal server error")
