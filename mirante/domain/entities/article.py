"""Entidades que representam artigos servidos pelo feed."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class Article:
    """Artigo normalizado a partir de um registro da API de notícias.

    O ``id`` é apenas a posição do artigo na resposta em que foi produzido e
    não é estável entre chamadas; a identidade real do artigo é a ``url``.
    """

    id: Union[int, str]
    title: str
    source: str
    url: str
    description: str = ""
    author: Optional[str] = None
    image: Optional[str] = None
    published_at: Optional[str] = None
    read_time: int = 1
    category: str = "General"
    pinned: bool = False
    note: Optional[str] = None
    pinned_at: Optional[str] = None


@dataclass(frozen=True)
class PinnedArticle:
    """Artigo fixado por um editor no topo do feed."""

    url: str
    title: str
    source: str
    description: str = ""
    author: Optional[str] = None
    image: Optional[str] = None
    published_at: Optional[str] = None
    read_time: int = 1
    category: str = "General"
    note: str = ""
    pinned_at: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PinnedArticle":
        """Reconstrói o registro a partir do documento persistido."""

        try:
            read_time = int(data.get("readTime") or 1)
        except (TypeError, ValueError, OverflowError):
            read_time = 1
        return cls(
            url=str(data["url"]),
            title=str(data.get("title") or ""),
            source=str(data.get("source") or ""),
            description=str(data.get("description") or ""),
            author=_optional_text(data.get("author")),
            image=_optional_text(data.get("image")),
            published_at=_optional_text(data.get("publishedAt")),
            read_time=read_time,
            category=str(data.get("category") or "General"),
            note=str(data.get("note") or ""),
            pinned_at=_optional_text(data.get("pinnedAt")),
        )

    def to_mapping(self) -> Dict[str, Any]:
        """Serializa o registro no formato usado pelo armazenamento durável."""

        return {
            "url": self.url,
            "title": self.title,
            "source": self.source,
            "author": self.author,
            "description": self.description,
            "image": self.image,
            "publishedAt": self.published_at,
            "readTime": self.read_time,
            "category": self.category,
            "note": self.note,
            "pinnedAt": self.pinned_at,
        }

    def to_article(self, position: int) -> Article:
        """Converte o registro fixado em um item do feed marcado como ``pinned``."""

        return Article(
            id=f"pinned-{position}",
            title=self.title,
            source=self.source,
            url=self.url,
            description=self.description,
            author=self.author,
            image=self.image,
            published_at=self.published_at,
            read_time=self.read_time,
            category=self.category,
            pinned=True,
            note=self.note,
            pinned_at=self.pinned_at,
        )


__all__ = ["Article", "PinnedArticle"]
