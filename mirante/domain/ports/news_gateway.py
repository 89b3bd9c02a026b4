"""Porta de entrada para a API de busca de notícias."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class NewsGateway(ABC):
    """Define como o feed e o coletor consultam a API de notícias externa."""

    @property
    @abstractmethod
    def configured(self) -> bool:
        """Indica se a credencial da API externa está disponível."""

    @abstractmethod
    async def search(
        self,
        query: str,
        *,
        from_date: str,
        sort_by: str,
        page_size: int = 100,
    ) -> list[dict[str, Any]]:
        """Executar uma busca e retornar a lista bruta de artigos."""
