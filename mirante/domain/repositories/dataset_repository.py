"""Contrato de leitura e escrita do dataset histórico de artigos."""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable

from mirante.domain.entities import (
    Article,
    DatasetPage,
    DatasetQuery,
    DatasetStats,
    UpsertResult,
)


class DatasetRepository(ABC):
    """Define as operações do armazenamento de artigos indexado por URL."""

    @abstractmethod
    def upsert(
        self,
        articles: Iterable[Article],
        region: str,
        *,
        now: datetime | None = None,
    ) -> UpsertResult:
        """Inserir artigos novos ou atualizar os já vistos sem regredir campos."""

    @abstractmethod
    def query(self, query: DatasetQuery) -> DatasetPage:
        """Listar uma página de registros que atendem a todos os filtros."""

    @abstractmethod
    def stats(self) -> DatasetStats:
        """Calcular agregados do dataset."""
