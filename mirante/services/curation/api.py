"""Rotas FastAPI de leitura e edição da curadoria."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Header, Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from mirante.domain import PinnedArticle

from .auth import EDITOR_TOKEN_HEADER
from .container import CurationContainer


class UrlPayload(BaseModel):
    """Corpo das operações que recebem apenas a URL do artigo."""

    url: str | None = None


class PinPayload(BaseModel):
    """Corpo da operação de fixar, com os dados exibidos no topo do feed."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    url: str | None = None
    title: Any = None
    source: Any = None
    author: Any = None
    description: Any = None
    image: Any = None
    published_at: Any = None
    read_time: Any = None
    category: Any = None
    note: Any = None

    def metadata(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"url", "note"})


class PinnedArticleResponse(BaseModel):
    """Artigo fixado conforme persistido no armazenamento de curadoria."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    title: str
    source: str
    author: str | None = None
    description: str = ""
    image: str | None = None
    published_at: str | None = None
    read_time: int = 1
    category: str = "General"
    note: str = ""
    pinned_at: str | None = None

    @classmethod
    def from_domain(cls, article: PinnedArticle) -> "PinnedArticleResponse":
        return cls(
            url=article.url,
            title=article.title,
            source=article.source,
            author=article.author,
            description=article.description,
            image=article.image,
            published_at=article.published_at,
            read_time=article.read_time,
            category=article.category,
            note=article.note,
            pinned_at=article.pinned_at,
        )


class CurationResponse(BaseModel):
    hidden: list[str]
    pinned: list[PinnedArticleResponse]


class OkResponse(BaseModel):
    ok: bool = True


def include_routes(app: FastAPI, container: CurationContainer, *, prefix: str = "") -> None:
    """Registra as rotas de curadoria na aplicação informada."""

    router = APIRouter(prefix=prefix, tags=["Curadoria"])

    def require_editor(
        token: str | None = Header(default=None, alias=EDITOR_TOKEN_HEADER),
    ) -> None:
        container.authenticator.verify(token)

    @router.get("/api/curation", response_model=CurationResponse)
    def read_curation(response: Response) -> CurationResponse:
        """Estado editorial atual; público, pois as escolhas não são segredo."""

        state = container.store.snapshot()
        response.headers["Cache-Control"] = "no-store"
        return CurationResponse(
            hidden=list(state.hidden),
            pinned=[PinnedArticleResponse.from_domain(item) for item in state.pinned],
        )

    @router.post(
        "/api/curation/hide",
        response_model=OkResponse,
        dependencies=[Depends(require_editor)],
    )
    async def hide_article(payload: UrlPayload) -> OkResponse:
        await container.store.hide(payload.url)
        return OkResponse()

    @router.delete(
        "/api/curation/hide",
        response_model=OkResponse,
        dependencies=[Depends(require_editor)],
    )
    async def unhide_article(payload: UrlPayload) -> OkResponse:
        await container.store.unhide(payload.url)
        return OkResponse()

    @router.post(
        "/api/curation/pin",
        response_model=OkResponse,
        dependencies=[Depends(require_editor)],
    )
    async def pin_article(payload: PinPayload) -> OkResponse:
        note = str(payload.note) if payload.note is not None else None
        await container.store.pin(payload.url, payload.metadata(), note)
        return OkResponse()

    @router.delete(
        "/api/curation/pin",
        response_model=OkResponse,
        dependencies=[Depends(require_editor)],
    )
    async def unpin_article(payload: UrlPayload) -> OkResponse:
        await container.store.unpin(payload.url)
        return OkResponse()

    app.include_router(router)


__all__ = [
    "CurationResponse",
    "OkResponse",
    "PinPayload",
    "PinnedArticleResponse",
    "UrlPayload",
    "include_routes",
]
