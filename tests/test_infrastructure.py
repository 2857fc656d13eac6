"""
Tests for infrastructure adapters that can run without network access.
"""

import calendar
import json
import time
from unittest.mock import MagicMock

import pytest

from marketminds.domain.errors import MarketDataError
from marketminds.infrastructure.config import Settings
from marketminds.infrastructure.market_data.rss_news import RssNewsFeed, relative_time
from marketminds.infrastructure.market_data.symbol_map import TIME_RANGE_CONFIG, to_provider_symbol
from marketminds.infrastructure.persistence.json_message_store import JsonFileMessageStore
from marketminds.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

NOW = calendar.timegm((2026, 3, 2, 12, 0, 0))

SAMPLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Yahoo! Finance: ^GSPC News</title>
    <item>
      <title>Stocks edge higher ahead of jobs data</title>
      <link>https://finance.yahoo.com/news/stocks-edge-higher</link>
      <pubDate>Mon, 02 Mar 2026 11:45:00 GMT</pubDate>
    </item>
    <item>
      <title>Oil slips as supply worries ease</title>
      <link>https://finance.yahoo.com/news/oil-slips</link>
      <pubDate>Mon, 02 Mar 2026 09:00:00 GMT</pubDate>
    </item>
    <item>
      <link>https://finance.yahoo.com/news/untitled</link>
    </item>
  </channel>
</rss>
"""


class TestRelativeTime:
    """Tests for relative_time()."""

    @pytest.mark.parametrize(
        "seconds_ago, expected",
        [(30, "0m ago"), (12 * 60, "12m ago"), (3 * 3600, "3h ago"), (2 * 86400 + 5, "2d ago")],
    )
    def test_buckets(self, seconds_ago: int, expected: str) -> None:
        assert relative_time(time.gmtime(NOW - seconds_ago), NOW) == expected

    def test_unknown_date(self) -> None:
        assert relative_time(None, NOW) == "Recent"


class TestRssNewsFeed:
    """Parsing of the headline feed."""

    def test_parse_items(self) -> None:
        items = RssNewsFeed(clock=lambda: NOW).parse(SAMPLE_FEED, limit=5)
        assert [item.time for item in items] == ["15m ago", "3h ago", "Recent"]
        assert items[0].title == "Stocks edge higher ahead of jobs data"
        assert items[0].source == "Yahoo Finance"
        assert items[2].title == "Market Update"

    def test_limit(self) -> None:
        assert len(RssNewsFeed(clock=lambda: NOW).parse(SAMPLE_FEED, limit=1)) == 1

    def test_garbage_raises(self) -> None:
        with pytest.raises(MarketDataError):
            RssNewsFeed().parse("<<< not a feed", limit=5)


class TestSymbolMap:
    """Display-symbol translation and range table."""

    def test_index_maps_to_provider_symbol(self) -> None:
        assert to_provider_symbol("S&P 500") == "^GSPC"

    def test_plain_tickers_pass_through(self) -> None:
        assert to_provider_symbol("AAPL") == "AAPL"

    def test_every_range_is_configured(self) -> None:
        assert set(TIME_RANGE_CONFIG) == {"1D", "1W", "1M", "1Y", "5Y", "MAX"}


class TestJsonFileMessageStore:
    """File-backed transcript store."""

    def test_round_trip(self, tmp_path) -> None:
        store = JsonFileMessageStore(tmp_path)
        store.save("stockie_messages_v1:alice", [{"id": "1"}])
        assert JsonFileMessageStore(tmp_path).load("stockie_messages_v1:alice") == [{"id": "1"}]

    def test_missing_key(self, tmp_path) -> None:
        assert JsonFileMessageStore(tmp_path).load("nobody") is None

    def test_corrupt_file_reads_as_empty(self, tmp_path) -> None:
        store = JsonFileMessageStore(tmp_path)
        store.save("k", [])
        next(tmp_path.glob("*.json")).write_text("{not json", encoding="utf-8")
        assert store.load("k") is None

    def test_clear_is_idempotent(self, tmp_path) -> None:
        store = JsonFileMessageStore(tmp_path)
        store.save("k", [{"id": "1"}])
        store.clear("k")
        store.clear("k")
        assert store.load("k") is None


class TestSecretsManagerAdapter:
    """Secrets Manager adapter with an injected client."""

    @pytest.fixture
    def client(self) -> MagicMock:
        client = MagicMock()
        client.get_secret_value.return_value = {
            "SecretString": json.dumps({"LANGFUSE_PUBLIC_KEY": "pk", "LANGFUSE_SECRET_KEY": "sk"})
        }
        return client

    def test_get_secret(self, client: MagicMock) -> None:
        secret = SecretsManagerAdapter(client=client).get_secret("arn:secret")
        client.get_secret_value.assert_called_once_with(SecretId="arn:secret")
        assert secret["LANGFUSE_PUBLIC_KEY"] == "pk"

    def test_load_into_env_keeps_existing(self, client: MagicMock, monkeypatch) -> None:
        monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "already-set")
        monkeypatch.setenv("LANGFUSE_SECRET_KEY", "")
        monkeypatch.delenv("LANGFUSE_SECRET_KEY")
        loaded = SecretsManagerAdapter(client=client).load_into_env("arn:secret")
        assert loaded == ["LANGFUSE_SECRET_KEY"]
        assert Settings.from_env(dotenv=False).langfuse_public_key == "already-set"


class TestSettings:
    """Settings.from_env()."""

    def test_defaults(self, monkeypatch) -> None:
        for name in ("QUOTE_CACHE_TTL_SECONDS", "MESSAGE_STORE_DIR", "LANGFUSE_PUBLIC_KEY"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env(dotenv=False)
        assert settings.quote_cache_ttl == 10.0
        assert settings.message_store_dir is None
        assert not settings.tracing_enabled

    def test_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("QUOTE_CACHE_TTL_SECONDS", "30")
        monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk")
        settings = Settings.from_env(dotenv=False)
        assert settings.quote_cache_ttl == 30.0
        assert settings.tracing_enabled

    def test_bad_number(self, monkeypatch) -> None:
        monkeypatch.setenv("NEWS_POLL_SECONDS", "soon")
        with pytest.raises(ValueError, match="NEWS_POLL_SECONDS"):
            Settings.from_env(dotenv=False)
