"""Dependency container for the live news feed."""
from __future__ import annotations

from dataclasses import dataclass

from mirante.domain import DatasetRepository, NewsGateway
from mirante.services.curation.store import CurationStore
from mirante.settings import AppSettings

from .cache import ResponseCache
from .service import FeedService


@dataclass
class FeedContainer:
    """Container exposing feed service dependencies."""

    news_gateway: NewsGateway
    cache: ResponseCache
    feed_service: FeedService


def build_feed_container(
    settings: AppSettings,
    gateway: NewsGateway,
    *,
    curation_store: CurationStore | None = None,
    dataset_repository: DatasetRepository | None = None,
) -> FeedContainer:
    """Build the feed container around a shared gateway."""

    cache = ResponseCache(ttl=settings.cache_ttl)
    feed_service = FeedService(
        gateway,
        cache,
        curation_store,
        dataset_repository=dataset_repository,
        blocked_domains=settings.blocked_domains,
    )
    return FeedContainer(news_gateway=gateway, cache=cache, feed_service=feed_service)
