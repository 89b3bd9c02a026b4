"""Cliente HTTP assíncrono para a busca ``/v2/everything`` da NewsAPI."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from mirante.domain import (
    ConfigError,
    NetworkError,
    NewsGateway,
    UpstreamError,
    UpstreamTimeoutError,
)

DEFAULT_NEWSAPI_URL = "https://newsapi.org/v2/everything"
DEFAULT_TIMEOUT_SECONDS = 10.0


class NewsApiClient(NewsGateway):
    """Consulta a NewsAPI com tempo de espera limitado e erros tipados."""

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = DEFAULT_NEWSAPI_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        language: str = "en",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Cria o cliente configurando a credencial e o cliente HTTP interno.

        Parameters
        ----------
        api_key:
            Chave da NewsAPI. Quando ausente, toda busca levanta ``ConfigError``.
        base_url:
            Endereço completo do endpoint de busca.
        timeout:
            Tempo máximo, em segundos, aguardando a resposta completa. Ao
            estourar, a requisição em andamento é cancelada.
        language:
            Idioma enviado no parâmetro ``language``.
        client:
            Instância de :class:`httpx.AsyncClient` reutilizável. Quando
            omitida, o cliente cria e gerencia uma instância própria.
        """

        self._api_key = api_key or None
        self._base_url = base_url
        self._timeout = timeout
        self._language = language
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)
        """Cliente HTTP usado para efetuar chamadas à API."""

        self._owns_client: bool = client is None
        """Indica se o cliente HTTP é gerenciado internamente."""

        self._log = logging.getLogger("mirante.newsapi")

    @property
    def configured(self) -> bool:
        return self._api_key is not None

    async def search(
        self,
        query: str,
        *,
        from_date: str,
        sort_by: str,
        page_size: int = 100,
    ) -> list[dict[str, Any]]:
        """Executa uma busca e retorna a lista bruta de artigos, sem filtros.

        Raises:
            ConfigError: Quando a chave da API não foi configurada.
            UpstreamTimeoutError: Quando não há resposta dentro do limite.
            UpstreamError: Quando a API responde com ``status`` diferente de ``ok``.
            NetworkError: Em falhas de transporte (DNS, conexão, etc.).
        """

        if not self._api_key:
            raise ConfigError("NEWSAPI_KEY não configurada")

        params = {
            "q": query,
            "language": self._language,
            "sortBy": sort_by,
            "from": from_date,
            "pageSize": page_size,
        }
        # A chave vai no cabeçalho para não aparecer em logs de URL.
        headers = {"X-Api-Key": self._api_key}
        try:
            response = await asyncio.wait_for(
                self._client.get(self._base_url, params=params, headers=headers),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            self._log.error("Busca na NewsAPI excedeu %.1fs", self._timeout)
            raise UpstreamTimeoutError(
                f"NewsAPI não respondeu em {self._timeout}s"
            ) from exc
        except httpx.RequestError as exc:
            self._log.error("Falha de rede ao consultar a NewsAPI: %s", exc)
            raise NetworkError(f"Falha de rede ao consultar a NewsAPI: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            self._log.error(
                "Resposta inválida da NewsAPI (HTTP %s)", response.status_code
            )
            raise UpstreamError(
                f"Resposta não JSON da NewsAPI (HTTP {response.status_code})"
            ) from exc

        if not isinstance(data, dict) or data.get("status") != "ok":
            message = data.get("message") if isinstance(data, dict) else None
            message = message or f"HTTP {response.status_code}"
            self._log.error("Erro da NewsAPI: %s", message)
            raise UpstreamError(f"NewsAPI error: {message}")

        articles = data.get("articles")
        return list(articles) if isinstance(articles, list) else []

    async def aclose(self) -> None:
        """Fecha o cliente HTTP quando a instância é de responsabilidade local."""

        if self._owns_client:
            await self._client.aclose()


__all__ = ["DEFAULT_NEWSAPI_URL", "DEFAULT_TIMEOUT_SECONDS", "NewsApiClient"]
