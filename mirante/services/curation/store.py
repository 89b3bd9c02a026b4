"""Estado editorial em memória com persistência síncrona a cada alteração."""
from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from mirante.domain import (
    CurationRepository,
    CurationState,
    PinnedArticle,
    ValidationError,
)
from mirante.ingestion import CATEGORIES, is_safe_url

MAX_TITLE_LENGTH = 500
MAX_SOURCE_LENGTH = 200
MAX_AUTHOR_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000
MAX_NOTE_LENGTH = 500
MAX_PUBLISHED_AT_LENGTH = 64
MIN_READ_TIME = 1
MAX_READ_TIME = 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clip(value: Any, limit: int) -> str:
    return str(value or "")[:limit]


def _clamp_read_time(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MIN_READ_TIME
    if math.isnan(number) or number == 0:
        return MIN_READ_TIME
    if math.isinf(number):
        return MAX_READ_TIME if number > 0 else MIN_READ_TIME
    return min(max(int(number), MIN_READ_TIME), MAX_READ_TIME)


def build_pinned_article(
    url: str,
    metadata: Mapping[str, Any],
    note: str | None,
    *,
    now: datetime,
) -> PinnedArticle:
    """Monta o registro fixado limitando o tamanho de cada campo recebido."""

    author = metadata.get("author")
    image = metadata.get("image")
    category = metadata.get("category")
    published_at = metadata.get("publishedAt")
    return PinnedArticle(
        url=url,
        title=_clip(metadata.get("title"), MAX_TITLE_LENGTH),
        source=_clip(metadata.get("source"), MAX_SOURCE_LENGTH),
        author=_clip(author, MAX_AUTHOR_LENGTH) if author else None,
        description=_clip(metadata.get("description"), MAX_DESCRIPTION_LENGTH),
        image=image if is_safe_url(image) else None,
        published_at=(
            _clip(published_at, MAX_PUBLISHED_AT_LENGTH) if published_at else now.isoformat()
        ),
        read_time=_clamp_read_time(metadata.get("readTime")),
        category=category if category in CATEGORIES else "General",
        note=_clip(note, MAX_NOTE_LENGTH),
        pinned_at=now.isoformat(),
    )


def _require_safe_url(url: str | None) -> str:
    if not url or not is_safe_url(url):
        raise ValidationError("Invalid URL")
    return url


def _require_url(url: str | None) -> str:
    if not url or not isinstance(url, str):
        raise ValidationError("URL required")
    return url


class CurationStore:
    """Mantém o estado de curadoria e o persiste antes de confirmar cada operação.

    O estado é carregado uma única vez do repositório na construção. Cada
    alteração monta um novo :class:`CurationState`, grava-o no repositório
    (fora do loop de eventos) e só então o torna visível. Se a gravação
    falhar, o ``StoreError`` chega ao chamador e o estado em memória continua
    o anterior.
    """

    def __init__(
        self,
        repository: CurationRepository,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._state: CurationState = repository.load()
        self._lock = asyncio.Lock()
        self._log = logging.getLogger("mirante.curation")
        self._log.info(
            "Curadoria carregada: %d ocultos, %d fixados",
            len(self._state.hidden),
            len(self._state.pinned),
        )

    def snapshot(self) -> CurationState:
        """Estado atual; seguro para leitura pública."""

        return self._state

    async def hide(self, url: str) -> bool:
        url = _require_safe_url(url)
        async with self._lock:
            if self._state.is_hidden(url):
                return False
            await self._commit(replace(self._state, hidden=self._state.hidden + (url,)))
        self._log.info("Artigo ocultado: %s", url)
        return True

    async def unhide(self, url: str) -> bool:
        url = _require_url(url)
        async with self._lock:
            if not self._state.is_hidden(url):
                return False
            hidden = tuple(item for item in self._state.hidden if item != url)
            await self._commit(replace(self._state, hidden=hidden))
        self._log.info("Artigo reexibido: %s", url)
        return True

    async def pin(
        self,
        url: str,
        metadata: Mapping[str, Any] | None = None,
        note: str | None = None,
    ) -> bool:
        """Fixa o artigo no topo; se já estiver fixado, nada muda."""

        url = _require_safe_url(url)
        async with self._lock:
            if self._state.is_pinned(url):
                return False
            article = build_pinned_article(url, metadata or {}, note, now=self._clock())
            await self._commit(replace(self._state, pinned=(article,) + self._state.pinned))
        self._log.info("Artigo fixado: %s", url)
        return True

    async def unpin(self, url: str) -> bool:
        url = _require_url(url)
        async with self._lock:
            if not self._state.is_pinned(url):
                return False
            pinned = tuple(item for item in self._state.pinned if item.url != url)
            await self._commit(replace(self._state, pinned=pinned))
        self._log.info("Artigo desafixado: %s", url)
        return True

    async def _commit(self, state: CurationState) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._repository.save, state)
        except Exception:
            self._log.exception("Falha ao persistir curadoria; estado anterior mantido")
            raise
        self._state = state


__all__ = ["CurationStore", "build_pinned_article"]
