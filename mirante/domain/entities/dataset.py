"""Entidades do conjunto histórico de artigos coletados."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_QUERY_LIMIT = 50
MAX_QUERY_LIMIT = 200
SORT_PUBLISHED = "published"
SORT_FIRST_SEEN = "first_seen"


@dataclass(frozen=True)
class DatasetRecord:
    """Linha persistida do dataset, identificada pela URL do artigo."""

    url: str
    title: str
    source: Optional[str]
    region: str
    first_seen_at: str
    last_seen_at: str
    description: Optional[str] = None
    author: Optional[str] = None
    image: Optional[str] = None
    published_at: Optional[str] = None
    category: Optional[str] = None
    read_time: Optional[int] = None

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "source": self.source,
            "author": self.author,
            "description": self.description,
            "image": self.image,
            "publishedAt": self.published_at,
            "category": self.category,
            "readTime": self.read_time,
            "region": self.region,
            "firstSeenAt": self.first_seen_at,
            "lastSeenAt": self.last_seen_at,
        }


@dataclass(frozen=True)
class UpsertResult:
    """Contagem de linhas inseridas e atualizadas em um lote."""

    inserted: int = 0
    updated: int = 0


@dataclass(frozen=True)
class DatasetQuery:
    """Filtros combinados com AND e paginação para consultas ao dataset."""

    category: Optional[str] = None
    region: Optional[str] = None
    source: Optional[str] = None
    published_from: Optional[str] = None
    published_to: Optional[str] = None
    search: Optional[str] = None
    sort: str = SORT_PUBLISHED
    limit: int = DEFAULT_QUERY_LIMIT
    offset: int = 0

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "DatasetQuery":
        """Constrói a consulta a partir de parâmetros textuais tolerando lixo.

        Valores ausentes ou vazios são ignorados; ``limit`` inválido volta ao
        padrão e é limitado a ``MAX_QUERY_LIMIT``; ``offset`` negativo vira 0.
        """

        def _text(name: str) -> Optional[str]:
            value = params.get(name)
            if value is None:
                return None
            text = str(value).strip()
            return text or None

        def _int(name: str, default: int) -> int:
            try:
                return int(params.get(name) or default)
            except (TypeError, ValueError):
                return default

        sort = _text("sort")
        return cls(
            category=_text("category"),
            region=_text("region"),
            source=_text("source"),
            published_from=_text("from"),
            published_to=_text("to"),
            search=_text("search"),
            sort=SORT_FIRST_SEEN if sort == SORT_FIRST_SEEN else SORT_PUBLISHED,
            limit=min(max(1, _int("limit", DEFAULT_QUERY_LIMIT)), MAX_QUERY_LIMIT),
            offset=max(0, _int("offset", 0)),
        )


@dataclass(frozen=True)
class DatasetPage:
    """Página de registros e total de correspondências sem paginação."""

    records: Tuple[DatasetRecord, ...]
    total: int


@dataclass(frozen=True)
class DatasetStats:
    """Agregados do dataset usados para acompanhamento da coleta."""

    total: int
    earliest: Optional[str] = None
    latest: Optional[str] = None
    first_seen: Optional[str] = None
    by_category: Tuple[Tuple[Optional[str], int], ...] = field(default_factory=tuple)
    by_region: Tuple[Tuple[Optional[str], int], ...] = field(default_factory=tuple)
    by_source: Tuple[Tuple[Optional[str], int], ...] = field(default_factory=tuple)

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "earliest": self.earliest,
            "latest": self.latest,
            "firstSeen": self.first_seen,
            "byCategory": [
                {"category": name, "count": count} for name, count in self.by_category
            ],
            "byRegion": [
                {"region": name, "count": count} for name, count in self.by_region
            ],
            "bySource": [
                {"source": name, "count": count} for name, count in self.by_source
            ],
        }


__all__ = [
    "DEFAULT_QUERY_LIMIT",
    "DatasetPage",
    "DatasetQuery",
    "DatasetRecord",
    "DatasetStats",
    "MAX_QUERY_LIMIT",
    "SORT_FIRST_SEEN",
    "SORT_PUBLISHED",
    "UpsertResult",
]
