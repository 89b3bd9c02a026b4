"""Configurações compartilhadas carregadas a partir de variáveis de ambiente."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_API_BIND_HOST = "0.0.0.0"
_DEFAULT_API_PORT = 3000
_TRUE_VALUES = {"1", "true", "yes", "on"}


@lru_cache(maxsize=None)
def get_api_port() -> int:
    """Retorna a porta configurada para expor a API."""

    return int(os.getenv("MIRANTE_API_PORT", os.getenv("PORT", _DEFAULT_API_PORT)))


@lru_cache(maxsize=None)
def get_api_bind_host() -> str:
    """Retorna o host utilizado pelo Uvicorn para escutar conexões."""

    return os.getenv("MIRANTE_API_BIND_HOST", _DEFAULT_API_BIND_HOST)


def get_log_level() -> str:
    return os.getenv("MIRANTE_LOG_LEVEL", "INFO")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


@dataclass
class AppSettings:
    """Configuração necessária para montar a aplicação e seus jobs."""

    newsapi_key: str | None = None
    newsapi_url: str = "https://newsapi.org/v2/everything"
    newsapi_timeout: float = 10.0
    editor_token: str | None = None
    cache_ttl: float = 300.0
    blocked_domains: tuple[str, ...] = field(default_factory=tuple)
    curation_enabled: bool = True
    curation_backend: str = "file"
    curation_file: str = "curation.json"
    dataset_enabled: bool = False
    collector_enabled: bool = False
    collector_interval: float = 3600.0
    collector_initial_delay: float = 10.0
    collector_region_delay: float = 2.0
    collector_window_days: int = 30
    #: Limite de requisições por IP nas rotas ``/api/``; ``None`` desliga.
    api_rate_limit: str | None = "30/minute"

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build a settings instance from environment variables."""

        dataset_enabled = _env_flag("MIRANTE_DATASET_ENABLED", False)
        return cls(
            newsapi_key=os.getenv("NEWSAPI_KEY") or None,
            newsapi_url=os.getenv("NEWSAPI_URL", "https://newsapi.org/v2/everything"),
            newsapi_timeout=float(os.getenv("NEWSAPI_TIMEOUT", "10")),
            editor_token=os.getenv("EDITOR_TOKEN") or None,
            cache_ttl=float(os.getenv("MIRANTE_CACHE_TTL", "300")),
            blocked_domains=_env_list("MIRANTE_BLOCKED_DOMAINS"),
            curation_enabled=_env_flag("MIRANTE_CURATION_ENABLED", True),
            curation_backend=os.getenv("MIRANTE_CURATION_BACKEND", "file").strip().lower(),
            curation_file=os.getenv("MIRANTE_CURATION_FILE", "curation.json"),
            dataset_enabled=dataset_enabled,
            collector_enabled=_env_flag("MIRANTE_COLLECTOR_ENABLED", dataset_enabled),
            collector_interval=float(os.getenv("MIRANTE_COLLECTOR_INTERVAL", "3600")),
            collector_initial_delay=float(
                os.getenv("MIRANTE_COLLECTOR_INITIAL_DELAY", "10")
            ),
            collector_region_delay=float(
                os.getenv("MIRANTE_COLLECTOR_REGION_DELAY", "2")
            ),
            collector_window_days=int(os.getenv("MIRANTE_COLLECTOR_WINDOW_DAYS", "30")),
            api_rate_limit=os.getenv("MIRANTE_API_RATE_LIMIT", "30/minute").strip() or None,
        )


__all__ = [
    "AppSettings",
    "get_api_bind_host",
    "get_api_port",
    "get_log_level",
]
