"""Job que alimenta o dataset histórico percorrendo todas as regiões."""
from __future__ import annotations

import asyncio
import enum
import logging
import time
from dataclasses import dataclass
from functools import partial
from typing import Any, Awaitable, Callable, Sequence

from mirante.domain import DatasetRepository, NewsGateway
from mirante.ingestion import SUPPORTED_REGIONS, build_query, days_ago, normalize_articles

DEFAULT_WINDOW_DAYS = 30
DEFAULT_REGION_DELAY_SECONDS = 2.0
DEFAULT_INTERVAL_SECONDS = 3600.0
DEFAULT_INITIAL_DELAY_SECONDS = 10.0


class CollectorState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class RegionCollection:
    """Resultado da coleta de uma única região."""

    region: str
    fetched: int
    accepted: int
    inserted: int
    updated: int


@dataclass(frozen=True)
class CollectorRunResult:
    """Resumo das métricas coletadas ao executar uma passada completa."""

    regions: tuple[RegionCollection, ...]
    errors: tuple[tuple[str, str], ...]
    elapsed_ms_total: int

    @property
    def inserted(self) -> int:
        return sum(item.inserted for item in self.regions)

    @property
    def updated(self) -> int:
        return sum(item.updated for item in self.regions)

    def to_mapping(self) -> dict[str, Any]:
        """Serializa o resultado completo para inspeção ou logs."""

        return {
            "inserted": self.inserted,
            "updated": self.updated,
            "regions": [
                {
                    "region": item.region,
                    "fetched": item.fetched,
                    "accepted": item.accepted,
                    "inserted": item.inserted,
                    "updated": item.updated,
                }
                for item in self.regions
            ],
            "errors": [list(item) for item in self.errors],
            "elapsed_ms_total": self.elapsed_ms_total,
        }


class DatasetCollectorJob:
    """Coleta cada região em ordem fixa e grava os artigos no dataset.

    Apenas uma passada roda por vez: um disparo que chega enquanto o job está
    em ``RUNNING`` é descartado, não enfileirado. Falhas de uma região são
    registradas e não interrompem as demais.
    """

    def __init__(
        self,
        gateway: NewsGateway,
        repository: DatasetRepository,
        *,
        regions: Sequence[str] = SUPPORTED_REGIONS,
        window_days: int = DEFAULT_WINDOW_DAYS,
        region_delay: float = DEFAULT_REGION_DELAY_SECONDS,
        sort_by: str = "publishedAt",
        page_size: int = 100,
        blocked_domains: Sequence[str] = (),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        self._gateway = gateway
        self._repository = repository
        self._regions = tuple(regions)
        self._window_days = window_days
        self._region_delay = region_delay
        self._sort_by = sort_by
        self._page_size = page_size
        self._blocked_domains = tuple(blocked_domains)
        self._sleep = sleep
        self._log = logger or logging.getLogger("mirante.collector")
        self._state = CollectorState.IDLE

    @property
    def state(self) -> CollectorState:
        return self._state

    async def run_once(self) -> CollectorRunResult | None:
        """Executa uma passada por todas as regiões.

        Retorna ``None`` quando outra passada já está em andamento.
        """

        if self._state is CollectorState.RUNNING:
            self._log.warning("Coleta anterior ainda em andamento; disparo ignorado")
            return None
        self._state = CollectorState.RUNNING
        try:
            return await self._collect_all()
        finally:
            self._state = CollectorState.IDLE

    async def run_forever(
        self,
        *,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        initial_delay: float = DEFAULT_INITIAL_DELAY_SECONDS,
    ) -> None:
        """Dispara uma passada logo após a inicialização e depois a cada ``interval``.

        Cada disparo roda como tarefa própria; se a passada anterior ainda não
        terminou, ``run_once`` descarta o novo disparo.
        """

        await asyncio.sleep(initial_delay)
        pending: set[asyncio.Task] = set()
        try:
            while True:
                task = asyncio.create_task(self.run_once())
                pending.add(task)
                task.add_done_callback(pending.discard)
                await asyncio.sleep(interval)
        finally:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

    async def _collect_all(self) -> CollectorRunResult:
        start = time.perf_counter()
        collected: list[RegionCollection] = []
        errors: list[tuple[str, str]] = []
        self._log.info("Iniciando coleta do dataset (%d regiões)", len(self._regions))
        for index, region in enumerate(self._regions):
            if index:
                await self._sleep(self._region_delay)
            try:
                collected.append(await self._collect_region(region))
            except Exception as exc:
                errors.append((region, str(exc)))
                self._log.error("Falha ao coletar região %s: %s", region, exc)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        result = CollectorRunResult(
            regions=tuple(collected),
            errors=tuple(errors),
            elapsed_ms_total=elapsed_ms,
        )
        self._log.info(
            "Coleta finalizada: %d inseridos, %d atualizados, %d erros em %dms",
            result.inserted,
            result.updated,
            len(result.errors),
            elapsed_ms,
        )
        return result

    async def _collect_region(self, region: str) -> RegionCollection:
        raw = await self._gateway.search(
            build_query(region),
            from_date=days_ago(self._window_days),
            sort_by=self._sort_by,
            page_size=self._page_size,
        )
        articles = normalize_articles(raw, blocked_domains=self._blocked_domains)
        loop = asyncio.get_running_loop()
        upserted = await loop.run_in_executor(
            None, partial(self._repository.upsert, articles, region)
        )
        self._log.info(
            "Região %s: %d artigos, %d novos, %d atualizados",
            region,
            len(articles),
            upserted.inserted,
            upserted.updated,
        )
        return RegionCollection(
            region=region,
            fetched=len(raw),
            accepted=len(articles),
            inserted=upserted.inserted,
            updated=upserted.updated,
        )


__all__ = [
    "CollectorRunResult",
    "CollectorState",
    "DatasetCollectorJob",
    "RegionCollection",
]
