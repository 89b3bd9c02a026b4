"""Rotas FastAPI do feed de notícias ao vivo."""
from __future__ import annotations

from fastapi import APIRouter, FastAPI, Query, Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from mirante.domain import Article

from .container import FeedContainer
from .service import FeedQuery


class ArticleResponse(BaseModel):
    """Representação pública de um artigo do feed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    #: Posição do artigo na resposta, ou ``pinned-<n>`` para fixados.
    id: int | str
    title: str
    source: str
    author: str | None = None
    description: str = ""
    #: Endereço do artigo; identidade do artigo em todo o sistema.
    url: str
    image: str | None = None
    published_at: str | None = None
    #: Minutos estimados de leitura.
    read_time: int = 1
    category: str = "General"
    #: Indica que o artigo foi fixado por um editor.
    pinned: bool = False
    note: str | None = None
    pinned_at: str | None = None

    @classmethod
    def from_domain(cls, article: Article) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            source=article.source,
            author=article.author,
            description=article.description,
            url=article.url,
            image=article.image,
            published_at=article.published_at,
            read_time=article.read_time,
            category=article.category,
            pinned=article.pinned,
            note=article.note,
            pinned_at=article.pinned_at,
        )


class FeedResponse(BaseModel):
    articles: list[ArticleResponse]
    #: ``True`` quando os artigos vieram do cache em memória.
    cached: bool


def include_routes(app: FastAPI, container: FeedContainer, *, prefix: str = "") -> None:
    """Registra a rota do feed na aplicação informada."""

    router = APIRouter(prefix=prefix, tags=["Feed"])

    @router.get("/api/news", response_model=FeedResponse)
    async def get_news(
        response: Response,
        sort_by: str | None = Query(default=None, alias="sortBy"),
        days: str | None = Query(default=None),
        region: str | None = Query(default=None),
        force: str | None = Query(default=None),
    ) -> FeedResponse:
        """Retorna o feed curado; ``force=1`` ignora o cache na leitura."""

        query = FeedQuery.from_params(sort_by=sort_by, days=days, region=region)
        result = await container.feed_service.get_feed(query, force=force == "1")
        response.headers["Cache-Control"] = "no-store"
        return FeedResponse(
            articles=[ArticleResponse.from_domain(article) for article in result.articles],
            cached=result.cached,
        )

    app.include_router(router)


__all__ = ["ArticleResponse", "FeedResponse", "include_routes"]
