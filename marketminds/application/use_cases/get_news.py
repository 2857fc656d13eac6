"""
Use-case: latest market headlines.
Depends only on Domain ports and entities — no infrastructure imports.
"""

from marketminds.application.market.quote_service import QuoteService
from marketminds.domain.entities.market import NewsResponse

DEFAULT_NEWS_LIMIT = 5


class GetNewsUseCase:
    def __init__(self, quote_service: QuoteService) -> None:
        self._quotes = quote_service

    def execute(self, limit: int = DEFAULT_NEWS_LIMIT) -> NewsResponse:
        """Headlines, or the static placeholder item when the feed is unavailable.

        Raises:
            ValueError: if *limit* is not positive.
        """
        if limit <= 0:
            raise ValueError("limit must be greater than 0")
        return self._quotes.get_news(limit).value
