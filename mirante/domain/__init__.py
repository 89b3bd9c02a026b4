"""API pública do domínio do Mirante.

O módulo centraliza entidades, portas, repositórios e erros para que possam
ser importados diretamente de ``mirante.domain``.
"""

from .entities import (
    Article,
    CurationState,
    DatasetPage,
    DatasetQuery,
    DatasetRecord,
    DatasetStats,
    PinnedArticle,
    UpsertResult,
)
from .errors import (
    AuthError,
    ConfigError,
    MiranteError,
    NetworkError,
    StoreError,
    UpstreamError,
    UpstreamTimeoutError,
    ValidationError,
)
from .ports import NewsGateway
from .repositories import CurationRepository, DatasetRepository

__all__ = [
    "Article",
    "AuthError",
    "ConfigError",
    "CurationRepository",
    "CurationState",
    "DatasetPage",
    "DatasetQuery",
    "DatasetRecord",
    "DatasetRepository",
    "DatasetStats",
    "MiranteError",
    "NetworkError",
    "NewsGateway",
    "PinnedArticle",
    "StoreError",
    "UpsertResult",
    "UpstreamError",
    "UpstreamTimeoutError",
    "ValidationError",
]
