"""Contrato de persistência do estado editorial."""
from __future__ import annotations

from abc import ABC, abstractmethod

from mirante.domain.entities import CurationState


class CurationRepository(ABC):
    """Armazenamento durável e fonte de verdade do estado de curadoria."""

    @abstractmethod
    def load(self) -> CurationState:
        """Carregar o estado persistido; ausência de dados resulta em estado vazio."""

    @abstractmethod
    def save(self, state: CurationState) -> None:
        """Persistir o estado completo, levantando ``StoreError`` em caso de falha."""
