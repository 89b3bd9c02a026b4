from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from mirante.domain import (
    ConfigError,
    CurationState,
    DatasetRepository,
    NewsGateway,
    UpsertResult,
)
from mirante.ingestion import build_query, days_ago
from mirante.services.feed.cache import ResponseCache
from mirante.services.feed.service import FeedQuery, FeedService


class FakeGateway(NewsGateway):
    def __init__(self, articles: list[dict[str, Any]], *, configured: bool = True) -> None:
        self.articles = articles
        self.calls: list[dict[str, Any]] = []
        self._configured = configured

    @property
    def configured(self) -> bool:
        return self._configured

    async def search(self, query, *, from_date, sort_by, page_size=100):
        self.calls.append(
            {"query": query, "from_date": from_date, "sort_by": sort_by, "page_size": page_size}
        )
        return list(self.articles)


class FakeCurationStore:
    def __init__(self, state: CurationState) -> None:
        self.state = state

    def snapshot(self) -> CurationState:
        return self.state


class RecordingDatasetRepository(DatasetRepository):
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[list, str]] = []

    def upsert(self, articles, region, *, now=None):
        if self.fail:
            raise RuntimeError("mongo fora do ar")
        self.calls.append((list(articles), region))
        return UpsertResult(inserted=len(self.calls[-1][0]))

    def query(self, query):  # pragma: no cover - não usado
        raise NotImplementedError

    def stats(self):  # pragma: no cover - não usado
        raise NotImplementedError


def _raw(url: str, title: str = "Climate justice news") -> dict[str, Any]:
    return {"title": title, "url": url, "source": {"name": "Fonte"}}


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway([_raw("https://a.com"), _raw("https://b.com")])


def test_feed_query_defaults_unknown_values():
    query = FeedQuery.from_params(sort_by="relevancy", days="2", region="mars")

    assert query == FeedQuery(sort_by="popularity", days=7, region="global")
    assert FeedQuery.from_params(sort_by="publishedAt", days="30", region="asia") == FeedQuery(
        "publishedAt", 30, "asia"
    )
    assert FeedQuery.from_params(days="abc").days == 7


def test_first_request_fetches_and_second_hits_cache(gateway):
    service = FeedService(gateway, ResponseCache(ttl=300))
    query = FeedQuery.from_params(sort_by="publishedAt", days="3", region="africa")

    first = asyncio.run(service.get_feed(query))
    second = asyncio.run(service.get_feed(query))

    assert first.cached is False
    assert second.cached is True
    assert len(gateway.calls) == 1
    call = gateway.calls[0]
    assert call["query"] == build_query("africa")
    assert call["from_date"] == days_ago(3)
    assert call["sort_by"] == "publishedAt"
    assert call["page_size"] == 100
    assert [item.url for item in second.articles] == ["https://a.com", "https://b.com"]


def test_one_day_window_starts_yesterday(gateway):
    service = FeedService(gateway, ResponseCache(ttl=300))
    query = FeedQuery.from_params(sort_by="publishedAt", days="1", region="africa")

    asyncio.run(service.get_feed(query))

    yesterday = (datetime.now(timezone.utc).date() - timedelta(days=1)).isoformat()
    call = gateway.calls[0]
    assert call["from_date"] == yesterday
    assert call["sort_by"] == "publishedAt"
    assert call["query"] == build_query("africa")


def test_force_bypasses_cache_read_but_refreshes_entry(gateway):
    service = FeedService(gateway, ResponseCache(ttl=300))
    query = FeedQuery()

    asyncio.run(service.get_feed(query))
    gateway.articles = [_raw("https://c.com")]
    forced = asyncio.run(service.get_feed(query, force=True))
    cached = asyncio.run(service.get_feed(query))

    assert forced.cached is False
    assert len(gateway.calls) == 2
    assert cached.cached is True
    assert [item.url for item in cached.articles] == ["https://c.com"]


def test_curation_is_applied_to_cached_responses(gateway):
    store = FakeCurationStore(CurationState())
    service = FeedService(gateway, ResponseCache(ttl=300), store)
    query = FeedQuery()
    asyncio.run(service.get_feed(query))

    store.state = CurationState(hidden=("https://a.com",))
    result = asyncio.run(service.get_feed(query))

    assert result.cached is True
    assert [item.url for item in result.articles] == ["https://b.com"]


def test_unconfigured_gateway_raises_before_cache_lookup():
    service = FeedService(FakeGateway([], configured=False), ResponseCache(ttl=300))

    with pytest.raises(ConfigError):
        asyncio.run(service.get_feed(FeedQuery()))


def test_blocked_domains_are_filtered():
    gateway = FakeGateway([_raw("https://spam.com/x"), _raw("https://ok.com/y")])
    service = FeedService(gateway, ResponseCache(ttl=300), blocked_domains=["spam.com"])

    result = asyncio.run(service.get_feed(FeedQuery()))

    assert [item.url for item in result.articles] == ["https://ok.com/y"]


def test_fetched_articles_are_recorded_in_dataset(gateway):
    repository = RecordingDatasetRepository()
    service = FeedService(gateway, ResponseCache(ttl=300), dataset_repository=repository)

    asyncio.run(service.get_feed(FeedQuery(region="europe")))

    assert len(repository.calls) == 1
    articles, region = repository.calls[0]
    assert region == "europe"
    assert len(articles) == 2


def test_dataset_failure_does_not_break_feed(gateway):
    repository = RecordingDatasetRepository(fail=True)
    service = FeedService(gateway, ResponseCache(ttl=300), dataset_repository=repository)

    result = asyncio.run(service.get_feed(FeedQuery()))

    assert len(result.articles) == 2
