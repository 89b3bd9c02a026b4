"""Caso de uso do feed: cache, busca, normalização e curadoria."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Sequence

from mirante.domain import (
    Article,
    ConfigError,
    CurationState,
    DatasetRepository,
    NewsGateway,
)
from mirante.ingestion import build_query, days_ago, normalize_articles, resolve_region
from mirante.ingestion.query import DEFAULT_REGION
from mirante.services.curation.overlay import apply_curation
from mirante.services.curation.store import CurationStore

from .cache import CacheKey, ResponseCache

SORT_OPTIONS = ("popularity", "publishedAt")
DAY_OPTIONS = (1, 3, 7, 30)
DEFAULT_SORT = "popularity"
DEFAULT_DAYS = 7
PAGE_SIZE = 100


@dataclass(frozen=True)
class FeedQuery:
    """Parâmetros já validados de uma requisição de feed."""

    sort_by: str = DEFAULT_SORT
    days: int = DEFAULT_DAYS
    region: str = DEFAULT_REGION

    @classmethod
    def from_params(
        cls,
        sort_by: str | None = None,
        days: str | int | None = None,
        region: str | None = None,
    ) -> "FeedQuery":
        """Aceita valores crus da query string; desconhecidos voltam ao padrão."""

        try:
            days_value = int(days) if days is not None else DEFAULT_DAYS
        except (TypeError, ValueError):
            days_value = DEFAULT_DAYS
        return cls(
            sort_by=sort_by if sort_by in SORT_OPTIONS else DEFAULT_SORT,
            days=days_value if days_value in DAY_OPTIONS else DEFAULT_DAYS,
            region=resolve_region(region),
        )

    @property
    def cache_key(self) -> CacheKey:
        return CacheKey(self.sort_by, self.days, self.region)


@dataclass(frozen=True)
class FeedResult:
    articles: list[Article]
    cached: bool


class FeedService:
    """Coordena o atendimento do feed ao vivo.

    O cache guarda artigos antes da curadoria; a curadoria é aplicada em toda
    resposta, vinda do cache ou não, para que ocultar ou fixar tenha efeito
    imediato sem invalidar entradas.
    """

    def __init__(
        self,
        gateway: NewsGateway,
        cache: ResponseCache,
        curation_store: CurationStore | None = None,
        *,
        dataset_repository: DatasetRepository | None = None,
        blocked_domains: Sequence[str] = (),
    ) -> None:
        self._gateway = gateway
        self._cache = cache
        self._curation_store = curation_store
        self._dataset_repository = dataset_repository
        self._blocked_domains = tuple(blocked_domains)
        self._log = logging.getLogger("mirante.feed")

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def curation_state(self) -> CurationState:
        if self._curation_store is None:
            return CurationState()
        return self._curation_store.snapshot()

    async def get_feed(self, query: FeedQuery, *, force: bool = False) -> FeedResult:
        """Retorna o feed curado para ``query``.

        Com ``force`` a leitura do cache é ignorada, mas a resposta nova ainda
        é gravada nele para as próximas requisições.
        """

        if not self._gateway.configured:
            raise ConfigError("NEWSAPI_KEY não configurada")

        key = query.cache_key
        if not force:
            entry = self._cache.get(key)
            if entry is not None:
                return FeedResult(
                    articles=apply_curation(entry.articles, self.curation_state()),
                    cached=True,
                )

        raw = await self._gateway.search(
            build_query(query.region),
            from_date=days_ago(query.days),
            sort_by=query.sort_by,
            page_size=PAGE_SIZE,
        )
        articles = normalize_articles(raw, blocked_domains=self._blocked_domains)
        self._cache.set(key, articles)
        self._log.info(
            "Feed atualizado (%s, %sd, %s): %d de %d artigos aceitos",
            query.sort_by,
            query.days,
            query.region,
            len(articles),
            len(raw),
        )
        await self._record_in_dataset(articles, query.region)
        return FeedResult(
            articles=apply_curation(articles, self.curation_state()),
            cached=False,
        )

    async def _record_in_dataset(self, articles: list[Article], region: str) -> None:
        """Registra os artigos buscados no dataset; falhas não afetam o feed."""

        if self._dataset_repository is None or not articles:
            return
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                None, partial(self._dataset_repository.upsert, articles, region)
            )
        except Exception as exc:
            self._log.warning("Falha ao registrar feed de %s no dataset: %s", region, exc)
            return
        self._log.debug(
            "Dataset (%s): %d inseridos, %d atualizados",
            region,
            result.inserted,
            result.updated,
        )


__all__ = [
    "DAY_OPTIONS",
    "DEFAULT_DAYS",
    "DEFAULT_SORT",
    "FeedQuery",
    "FeedResult",
    "FeedService",
    "PAGE_SIZE",
    "SORT_OPTIONS",
]
