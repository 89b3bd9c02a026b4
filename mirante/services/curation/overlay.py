"""Aplicação do estado editorial sobre uma lista de artigos."""
from __future__ import annotations

from typing import Iterable

from mirante.domain import Article, CurationState


def apply_curation(articles: Iterable[Article], state: CurationState) -> list[Article]:
    """Remove artigos ocultos ou fixados e coloca os fixados à frente.

    Os fixados são sempre reinseridos na ordem da lista de fixados, mesmo
    quando não aparecem em ``articles``; fixar tem precedência sobre ocultar.
    A função não altera ``articles`` nem ``state``.
    """

    hidden = state.hidden_urls
    pinned_urls = state.pinned_urls
    live = [
        article
        for article in articles
        if article.url not in hidden and article.url not in pinned_urls
    ]
    pinned = [item.to_article(position) for position, item in enumerate(state.pinned)]
    return pinned + live


__all__ = ["apply_curation"]
