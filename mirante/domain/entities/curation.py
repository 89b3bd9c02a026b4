"""Estado editorial aplicado sobre o feed automático."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from .article import PinnedArticle


@dataclass(frozen=True)
class CurationState:
    """Conjunto de URLs ocultas e lista ordenada de artigos fixados.

    A instância é imutável; cada operação editorial produz um novo estado
    que só substitui o anterior depois de persistido.
    """

    hidden: Tuple[str, ...] = ()
    pinned: Tuple[PinnedArticle, ...] = field(default_factory=tuple)

    @property
    def hidden_urls(self) -> frozenset[str]:
        return frozenset(self.hidden)

    @property
    def pinned_urls(self) -> frozenset[str]:
        return frozenset(item.url for item in self.pinned)

    def is_hidden(self, url: str) -> bool:
        return url in self.hidden

    def is_pinned(self, url: str) -> bool:
        return any(item.url == url for item in self.pinned)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CurationState":
        """Carrega o estado a partir do documento persistido, ignorando lixo."""

        raw_hidden = data.get("hidden")
        raw_pinned = data.get("pinned")
        hidden: list[str] = []
        if isinstance(raw_hidden, list):
            for url in raw_hidden:
                if isinstance(url, str) and url and url not in hidden:
                    hidden.append(url)
        pinned: list[PinnedArticle] = []
        seen: set[str] = set()
        if isinstance(raw_pinned, list):
            for item in raw_pinned:
                if not isinstance(item, Mapping) or not item.get("url"):
                    continue
                article = PinnedArticle.from_mapping(item)
                if article.url in seen:
                    continue
                seen.add(article.url)
                pinned.append(article)
        return cls(hidden=tuple(hidden), pinned=tuple(pinned))

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "hidden": list(self.hidden),
            "pinned": [item.to_mapping() for item in self.pinned],
        }


__all__ = ["CurationState"]
