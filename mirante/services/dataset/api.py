"""Rotas FastAPI de consulta ao dataset histórico."""
from __future__ import annotations

import asyncio

from fastapi import APIRouter, FastAPI, Query
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from mirante.domain import DatasetQuery, DatasetRecord

from .container import DatasetContainer


class DatasetArticleResponse(BaseModel):
    """Linha do dataset exposta pela API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    title: str
    source: str | None = None
    author: str | None = None
    description: str | None = None
    image: str | None = None
    published_at: str | None = None
    category: str | None = None
    read_time: int | None = None
    #: Região do primeiro avistamento do artigo.
    region: str
    first_seen_at: str
    last_seen_at: str

    @classmethod
    def from_domain(cls, record: DatasetRecord) -> "DatasetArticleResponse":
        return cls(
            url=record.url,
            title=record.title,
            source=record.source,
            author=record.author,
            description=record.description,
            image=record.image,
            published_at=record.published_at,
            category=record.category,
            read_time=record.read_time,
            region=record.region,
            first_seen_at=record.first_seen_at,
            last_seen_at=record.last_seen_at,
        )


class DatasetPageResponse(BaseModel):
    articles: list[DatasetArticleResponse]
    #: Total de registros que atendem aos filtros, sem paginação.
    total: int


class CategoryCount(BaseModel):
    category: str | None
    count: int


class RegionCount(BaseModel):
    region: str | None
    count: int


class SourceCount(BaseModel):
    source: str | None
    count: int


class DatasetStatsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int
    earliest: str | None = None
    latest: str | None = None
    first_seen: str | None = None
    by_category: list[CategoryCount]
    by_region: list[RegionCount]
    by_source: list[SourceCount]


def include_routes(app: FastAPI, container: DatasetContainer, *, prefix: str = "") -> None:
    """Registra as rotas do dataset na aplicação informada."""

    router = APIRouter(prefix=prefix, tags=["Dataset"])

    @router.get("/api/dataset/articles", response_model=DatasetPageResponse)
    async def list_dataset_articles(
        category: str | None = None,
        region: str | None = None,
        source: str | None = None,
        published_from: str | None = Query(default=None, alias="from"),
        published_to: str | None = Query(default=None, alias="to"),
        search: str | None = None,
        sort: str | None = None,
        limit: str | None = None,
        offset: str | None = None,
    ) -> DatasetPageResponse:
        """Lista registros filtrados, do mais recente para o mais antigo."""

        query = DatasetQuery.from_params(
            {
                "category": category,
                "region": region,
                "source": source,
                "from": published_from,
                "to": published_to,
                "search": search,
                "sort": sort,
                "limit": limit,
                "offset": offset,
            }
        )
        loop = asyncio.get_running_loop()
        page = await loop.run_in_executor(None, container.repository.query, query)
        return DatasetPageResponse(
            articles=[DatasetArticleResponse.from_domain(record) for record in page.records],
            total=page.total,
        )

    @router.get("/api/dataset/stats", response_model=DatasetStatsResponse)
    async def dataset_stats() -> DatasetStatsResponse:
        loop = asyncio.get_running_loop()
        stats = await loop.run_in_executor(None, container.repository.stats)
        return DatasetStatsResponse(
            total=stats.total,
            earliest=stats.earliest,
            latest=stats.latest,
            first_seen=stats.first_seen,
            by_category=[
                CategoryCount(category=name, count=count) for name, count in stats.by_category
            ],
            by_region=[
                RegionCount(region=name, count=count) for name, count in stats.by_region
            ],
            by_source=[
                SourceCount(source=name, count=count) for name, count in stats.by_source
            ],
        )

    app.include_router(router)


__all__ = [
    "DatasetArticleResponse",
    "DatasetPageResponse",
    "DatasetStatsResponse",
    "include_routes",
]
