"""
Runtime settings read from the environment (a local .env file is honoured).
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from marketminds.infrastructure.market_data.rss_news import DEFAULT_FEED_URL


def _float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    quote_cache_ttl: float = 10.0
    quote_poll_seconds: float = 15.0
    news_poll_seconds: float = 120.0
    portfolio_poll_seconds: float = 15.0
    message_store_dir: Optional[str] = None
    news_feed_url: str = DEFAULT_FEED_URL
    http_timeout: float = 10.0
    aws_region: str = "us-east-1"
    langfuse_secret_arn: Optional[str] = None
    langfuse_public_key: Optional[str] = None

    @property
    def tracing_enabled(self) -> bool:
        return bool(self.langfuse_public_key)

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Raises:
            ValueError: if a numeric setting cannot be parsed.
        """
        if dotenv:
            load_dotenv()
        return cls(
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            quote_cache_ttl=_float("QUOTE_CACHE_TTL_SECONDS", 10.0),
            quote_poll_seconds=_float("QUOTE_POLL_SECONDS", 15.0),
            news_poll_seconds=_float("NEWS_POLL_SECONDS", 120.0),
            portfolio_poll_seconds=_float("PORTFOLIO_POLL_SECONDS", 15.0),
            message_store_dir=os.environ.get("MESSAGE_STORE_DIR") or None,
            news_feed_url=os.environ.get("NEWS_FEED_URL") or DEFAULT_FEED_URL,
            http_timeout=_float("HTTP_TIMEOUT_SECONDS", 10.0),
            aws_region=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
            langfuse_secret_arn=os.environ.get("LANGFUSE_SECRET_ARN") or None,
            langfuse_public_key=os.environ.get("LANGFUSE_PUBLIC_KEY") or None,
        )

    def refreshed(self) -> "Settings":
        """Re-read the environment without touching .env (after secrets were loaded)."""
        return Settings.from_env(dotenv=False)
