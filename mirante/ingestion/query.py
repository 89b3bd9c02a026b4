"""Construção da consulta enviada à API de notícias."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

#: Limite de caracteres aceito pelo parâmetro ``q`` da API externa.
MAX_QUERY_LENGTH = 500

DEFAULT_REGION = "global"

# Mantido abaixo de ~230 caracteres para que as cláusulas regionais caibam
# em MAX_QUERY_LENGTH quando combinadas com AND.
BASE_QUERY = (
    '"climate justice" OR "environmental justice" OR "climate equity" OR '
    '"climate racism" OR "just transition" OR "climate policy" OR '
    '"fossil fuels" OR "environmental law" OR "carbon tax" OR "COP29" OR '
    '"COP30" OR "COP31" OR "climate summit"'
)

# A ordem das chaves define a ordem de rotação do coletor.
REGION_TERMS: dict[str, str | None] = {
    "global": None,
    "americas": (
        '"North America" OR "Latin America" OR "South America" OR '
        '"United States" OR Canada OR Mexico OR Brazil OR Colombia OR '
        'Caribbean OR "Indigenous peoples"'
    ),
    "africa": (
        'Africa OR Nigeria OR Kenya OR Ghana OR "South Africa" OR Ethiopia OR '
        'Uganda OR Mozambique OR Senegal OR "Sub-Saharan" OR "African continent"'
    ),
    "asia": (
        'Asia OR India OR Bangladesh OR Philippines OR Indonesia OR Pakistan OR '
        '"Pacific Islands" OR "Southeast Asia" OR China OR "Global South"'
    ),
    "europe": (
        'Europe OR "European Union" OR EU OR Britain OR Germany OR France OR '
        '"United Kingdom" OR Poland OR "climate litigation"'
    ),
    "mena": (
        '"Middle East" OR MENA OR "North Africa" OR Egypt OR Morocco OR Jordan OR '
        'Lebanon OR "Arab world" OR "Gulf states"'
    ),
}

SUPPORTED_REGIONS: tuple[str, ...] = tuple(REGION_TERMS)


def resolve_region(value: str | None) -> str:
    """Retorna a região informada quando suportada, ou ``global``."""

    if value in REGION_TERMS:
        return value  # type: ignore[return-value]
    return DEFAULT_REGION


def build_query(region: str | None = DEFAULT_REGION) -> str:
    """Combina o filtro temático fixo com o filtro geográfico da região.

    Regiões desconhecidas, assim como ``global``, não recebem cláusula
    geográfica. Quem ampliar as listas de termos precisa manter o resultado
    abaixo de ``MAX_QUERY_LENGTH``.
    """

    terms = REGION_TERMS.get(resolve_region(region))
    if not terms:
        return BASE_QUERY
    return f"({BASE_QUERY}) AND ({terms})"


def days_ago(days: int, *, today: date | None = None) -> str:
    """Data (UTC, ``YYYY-MM-DD``) de ``days`` dias atrás, usada como limite inferior."""

    reference = today or datetime.now(timezone.utc).date()
    return (reference - timedelta(days=days)).isoformat()


__all__ = [
    "BASE_QUERY",
    "DEFAULT_REGION",
    "MAX_QUERY_LENGTH",
    "REGION_TERMS",
    "SUPPORTED_REGIONS",
    "build_query",
    "days_ago",
    "resolve_region",
]
