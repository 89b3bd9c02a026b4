"""Normalização e categorização dos registros brutos da API de notícias."""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Mapping, Sequence
from urllib.parse import urlsplit

from mirante.domain import Article

_log = logging.getLogger("mirante.normalization")

WORDS_PER_MINUTE = 200
REMOVED_TITLE = "[Removed]"
UNKNOWN_SOURCE = "Unknown Source"
DEFAULT_CATEGORY = "General"

# Avaliadas em sequência; a primeira que casar define a categoria. Um texto
# que menciona "protest" e "research" fica em Community porque Community
# vem antes de Science.
CATEGORY_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"policy|legislation|law|government|bill|act|regulation|cop\d", re.IGNORECASE),
        "Policy",
    ),
    (
        re.compile(r"communit|grassroot|activist|protest|movement|people|indigenous", re.IGNORECASE),
        "Community",
    ),
    (
        re.compile(r"science|research|study|data|report|scientist|temperature|emission", re.IGNORECASE),
        "Science",
    ),
    (
        re.compile(r"environment|ecosystem|biodiversity|nature|ocean|forest|wildlife", re.IGNORECASE),
        "Environment",
    ),
)

CATEGORIES: tuple[str, ...] = tuple(label for _, label in CATEGORY_RULES) + (
    DEFAULT_CATEGORY,
)

_SAFE_SCHEMES = frozenset({"http", "https"})


def is_safe_url(value: Any) -> bool:
    """Aceita apenas URLs ``http``/``https`` com host (rejeita ``javascript:``, ``data:``)."""

    if not isinstance(value, str) or not value:
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme.lower() in _SAFE_SCHEMES and bool(parts.netloc)


def is_blocked(url: str, blocked_domains: Iterable[str]) -> bool:
    """Verifica se o host da URL é um dos domínios bloqueados ou subdomínio dele."""

    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        return False
    if not host:
        return False
    for domain in blocked_domains:
        domain = domain.strip().lower().lstrip(".")
        if domain and (host == domain or host.endswith("." + domain)):
            return True
    return False


def estimate_read_time(text: str | None) -> int:
    """Minutos de leitura estimados a 200 palavras por minuto, no mínimo 1."""

    if not text:
        return 1
    words = len(text.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def categorize(title: str | None, description: str | None) -> str:
    """Atribui exatamente uma categoria usando a primeira regra que casar."""

    text = f"{title or ''} {description or ''}".lower()
    for pattern, label in CATEGORY_RULES:
        if pattern.search(text):
            return label
    return DEFAULT_CATEGORY


def _is_acceptable(raw: Mapping[str, Any], blocked_domains: Sequence[str]) -> bool:
    title = raw.get("title")
    if not title or title == REMOVED_TITLE:
        return False
    url = raw.get("url")
    if not is_safe_url(url):
        return False
    if blocked_domains and is_blocked(url, blocked_domains):
        _log.debug("Artigo descartado por domínio bloqueado: %s", url)
        return False
    return True


def normalize_article(raw: Mapping[str, Any], position: int) -> Article:
    """Converte um registro bruto já validado em ``Article``."""

    source = raw.get("source")
    source_name = source.get("name") if isinstance(source, Mapping) else None
    description = raw.get("description") or ""
    content = raw.get("content") or ""
    image = raw.get("urlToImage")
    title = str(raw["title"])
    return Article(
        id=position,
        title=title,
        source=source_name or UNKNOWN_SOURCE,
        url=str(raw["url"]),
        description=description,
        author=raw.get("author") or None,
        image=image if is_safe_url(image) else None,
        published_at=raw.get("publishedAt"),
        read_time=estimate_read_time(f"{description} {content}"),
        category=categorize(title, description),
    )


def normalize_articles(
    raw_articles: Iterable[Mapping[str, Any]],
    *,
    blocked_domains: Sequence[str] = (),
) -> list[Article]:
    """Filtra e normaliza a lista bruta preservando a ordem original.

    O ``id`` de cada artigo é sua posição na lista filtrada, único apenas
    dentro desta resposta.
    """

    accepted = [
        raw
        for raw in raw_articles
        if isinstance(raw, Mapping) and _is_acceptable(raw, blocked_domains)
    ]
    return [normalize_article(raw, position) for position, raw in enumerate(accepted)]


__all__ = [
    "CATEGORIES",
    "CATEGORY_RULES",
    "DEFAULT_CATEGORY",
    "categorize",
    "estimate_read_time",
    "is_blocked",
    "is_safe_url",
    "normalize_article",
    "normalize_articles",
]
