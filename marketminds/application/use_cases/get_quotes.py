"""
Use-cases: quote lookups for the dashboard (explicit symbols, a catalog
category, or a free-text search).
Depends only on Domain ports and entities — no infrastructure imports.
"""

import logging

from marketminds.application.market.catalog import find_category, resolve_search_term
from marketminds.application.market.market_data_store import MarketDataStore
from marketminds.application.market.quote_service import QuoteService, normalize_symbols
from marketminds.domain.entities.market import Quote, QuoteResponse
from marketminds.domain.errors import SymbolNotFoundError, UnknownCategoryError

logger = logging.getLogger(__name__)


class GetQuotesUseCase:
    def __init__(self, quote_service: QuoteService) -> None:
        self._quotes = quote_service

    def execute(self, symbols: list[str]) -> QuoteResponse:
        """Quotes for *symbols*, ordered like the de-duplicated upper-cased input.

        Raises:
            ValueError: if no non-blank symbol is given.
        """
        if not normalize_symbols(symbols):
            raise ValueError("at least one symbol is required")
        return self._quotes.get_quotes(symbols).value


class GetMarketCategoryUseCase:
    def __init__(self, store: MarketDataStore) -> None:
        self._store = store

    def execute(self, category: str) -> list[Quote]:
        """Latest snapshot for a dashboard category (case-insensitive name).

        Raises:
            UnknownCategoryError: if *category* is not in the catalog.
        """
        name = find_category(category)
        if name is None:
            raise UnknownCategoryError(category)
        return self._store.snapshot(name)


class SearchSymbolUseCase:
    def __init__(self, quote_service: QuoteService) -> None:
        self._quotes = quote_service

    def execute(self, query: str) -> Quote:
        """Resolve a free-text lookup (keyword alias or ticker) to a single quote.

        Raises:
            ValueError: if *query* is blank.
            SymbolNotFoundError: if the provider has no quote for it.
        """
        if not query or not query.strip():
            raise ValueError("query must be a non-empty string")
        symbol = resolve_search_term(query)
        data = self._quotes.get_quotes([symbol]).value.data
        if not data:
            logger.info("Search for %r resolved to %s with no quote", query, symbol)
            raise SymbolNotFoundError(symbol)
        return data[0]
