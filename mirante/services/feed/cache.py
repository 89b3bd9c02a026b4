"""Cache em memória das respostas normalizadas, por combinação de parâmetros."""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, NamedTuple

from mirante.domain import Article

DEFAULT_TTL_SECONDS = 300.0


class CacheKey(NamedTuple):
    sort_by: str
    days: int
    region: str


@dataclass(frozen=True)
class CacheEntry:
    """Artigos pré-curadoria armazenados para uma chave e o instante da gravação."""

    key: CacheKey
    articles: tuple[Article, ...]
    timestamp: float


class ResponseCache:
    """Mapa chave → entrada com expiração por TTL e varredura periódica.

    Duas requisições concorrentes com cache vazio podem buscar e gravar a
    mesma chave; a última gravação vence e ambas têm conteúdo equivalente.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl deve ser maior que zero")
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._log = logging.getLogger("mirante.cache")

    def get(self, key: CacheKey) -> CacheEntry | None:
        """Retorna a entrada se ainda estiver fresca; caso contrário, ``None``."""

        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp < self._ttl:
            return entry
        return None

    def set(self, key: CacheKey, articles: list[Article] | tuple[Article, ...]) -> CacheEntry:
        entry = CacheEntry(key=key, articles=tuple(articles), timestamp=self._clock())
        self._entries[key] = entry
        return entry

    def sweep(self) -> int:
        """Remove as entradas expiradas e retorna quantas foram descartadas."""

        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if now - entry.timestamp >= self._ttl
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    async def run_sweeper(self, interval: float | None = None) -> None:
        """Executa ``sweep`` indefinidamente, uma vez a cada TTL por padrão."""

        interval = interval or self._ttl
        while True:
            await asyncio.sleep(interval)
            removed = self.sweep()
            if removed:
                self._log.debug("Varredura do cache removeu %d entradas", removed)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = ["CacheEntry", "CacheKey", "DEFAULT_TTL_SECONDS", "ResponseCache"]
