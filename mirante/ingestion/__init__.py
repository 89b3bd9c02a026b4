"""Regras puras de montagem de consultas e normalização de artigos."""

from .normalization import (
    CATEGORIES,
    categorize,
    estimate_read_time,
    is_blocked,
    is_safe_url,
    normalize_articles,
)
from .query import SUPPORTED_REGIONS, build_query, days_ago, resolve_region

__all__ = [
    "CATEGORIES",
    "SUPPORTED_REGIONS",
    "build_query",
    "categorize",
    "days_ago",
    "estimate_read_time",
    "is_blocked",
    "is_safe_url",
    "normalize_articles",
    "resolve_region",
]
