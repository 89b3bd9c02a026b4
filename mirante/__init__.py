"""Mirante - agregador de notícias sobre justiça climática."""
from .container import Container, build_container
from .domain import Article, CurationState, DatasetRecord, PinnedArticle
from .settings import AppSettings

__all__ = [
    "AppSettings",
    "Article",
    "Container",
    "CurationState",
    "DatasetRecord",
    "PinnedArticle",
    "build_container",
]
