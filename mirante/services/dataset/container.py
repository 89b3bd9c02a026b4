"""Dependency container for the historical dataset service."""
from __future__ import annotations

from dataclasses import dataclass

from mirante.domain import DatasetRepository, NewsGateway
from mirante.infrastructure.database import MongoClientFactory
from mirante.infrastructure.repositories import MongoDatasetRepository
from mirante.settings import AppSettings

from .jobs import DatasetCollectorJob


@dataclass
class DatasetContainer:
    """Container exposing dataset repository and collector job."""

    repository: DatasetRepository
    collector_job: DatasetCollectorJob


def build_dataset_container(
    settings: AppSettings,
    gateway: NewsGateway,
    *,
    repository: DatasetRepository | None = None,
    factory: MongoClientFactory | None = None,
) -> DatasetContainer:
    """Build the dataset container sharing the news gateway with the feed."""

    if repository is None:
        factory = factory or MongoClientFactory()
        repository = MongoDatasetRepository(factory.get_database()["articles"])

    collector_job = DatasetCollectorJob(
        gateway,
        repository,
        window_days=settings.collector_window_days,
        region_delay=settings.collector_region_delay,
        blocked_domains=settings.blocked_domains,
    )
    return DatasetContainer(repository=repository, collector_job=collector_job)
