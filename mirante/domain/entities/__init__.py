"""Entidades de domínio do Mirante."""

from .article import Article, PinnedArticle
from .curation import CurationState
from .dataset import DatasetPage, DatasetQuery, DatasetRecord, DatasetStats, UpsertResult

__all__ = [
    "Article",
    "CurationState",
    "DatasetPage",
    "DatasetQuery",
    "DatasetRecord",
    "DatasetStats",
    "PinnedArticle",
    "UpsertResult",
]
