"""Montagem do grafo de dependências compartilhado pela API e pela CLI."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mirante.domain import CurationRepository, DatasetRepository, NewsGateway
from mirante.infrastructure.database import MongoClientFactory
from mirante.services.curation import CurationContainer, build_curation_container
from mirante.services.dataset import DatasetContainer, build_dataset_container
from mirante.services.feed import FeedContainer, build_feed_container
from mirante.services.feed.clients import NewsApiClient
from mirante.settings import AppSettings

logger = logging.getLogger("mirante.container")


@dataclass
class Container:
    """Agrupa os containers de cada serviço habilitado."""

    settings: AppSettings
    feed: FeedContainer
    curation: CurationContainer | None = None
    dataset: DatasetContainer | None = None
    mongo_factory: MongoClientFactory | None = field(default=None, repr=False)

    async def aclose(self) -> None:
        """Libera o cliente HTTP e a conexão com o MongoDB."""

        aclose = getattr(self.feed.news_gateway, "aclose", None)
        if aclose is not None:
            await aclose()
        if self.mongo_factory is not None:
            self.mongo_factory.close()


def log_configuration_warnings(settings: AppSettings) -> None:
    if not settings.newsapi_key:
        logger.error("NEWSAPI_KEY não configurada; o feed responderá com erro 500.")
    if settings.curation_enabled and not settings.editor_token:
        logger.warning("EDITOR_TOKEN não configurado; o modo editor está desabilitado.")


def build_container(
    settings: AppSettings | None = None,
    *,
    news_client: NewsGateway | None = None,
    curation_repository: CurationRepository | None = None,
    dataset_repository: DatasetRepository | None = None,
    mongo_factory: MongoClientFactory | None = None,
) -> Container:
    """Constrói todos os serviços a partir das configurações informadas.

    Os parâmetros opcionais permitem substituir o cliente da NewsAPI e os
    repositórios, o que os testes usam para evitar rede e banco de dados.
    """

    settings = settings or AppSettings.from_env()
    gateway = news_client or NewsApiClient(
        settings.newsapi_key,
        base_url=settings.newsapi_url,
        timeout=settings.newsapi_timeout,
    )

    needs_mongo = (
        settings.curation_enabled
        and settings.curation_backend == "mongo"
        and curation_repository is None
    ) or (settings.dataset_enabled and dataset_repository is None)
    if needs_mongo and mongo_factory is None:
        mongo_factory = MongoClientFactory()

    curation: CurationContainer | None = None
    if settings.curation_enabled:
        curation = build_curation_container(
            settings, repository=curation_repository, factory=mongo_factory
        )

    dataset: DatasetContainer | None = None
    if settings.dataset_enabled:
        dataset = build_dataset_container(
            settings, gateway, repository=dataset_repository, factory=mongo_factory
        )

    feed = build_feed_container(
        settings,
        gateway,
        curation_store=curation.store if curation else None,
        dataset_repository=dataset.repository if dataset else None,
    )
    return Container(
        settings=settings,
        feed=feed,
        curation=curation,
        dataset=dataset,
        mongo_factory=mongo_factory,
    )


__all__ = ["Container", "build_container", "log_configuration_warnings"]
