"""Dependency container for the editorial curation service."""
from __future__ import annotations

from dataclasses import dataclass

from mirante.domain import CurationRepository
from mirante.infrastructure.database import MongoClientFactory
from mirante.infrastructure.repositories import (
    JsonCurationRepository,
    MongoCurationRepository,
)
from mirante.settings import AppSettings

from .auth import EditorAuthenticator
from .store import CurationStore


@dataclass
class CurationContainer:
    """Container exposing curation service dependencies."""

    repository: CurationRepository
    store: CurationStore
    authenticator: EditorAuthenticator


def build_curation_container(
    settings: AppSettings,
    *,
    repository: CurationRepository | None = None,
    factory: MongoClientFactory | None = None,
) -> CurationContainer:
    """Build the curation container, loading the persisted state once."""

    if repository is None:
        backend = settings.curation_backend
        if backend == "file":
            repository = JsonCurationRepository(settings.curation_file)
        elif backend == "mongo":
            factory = factory or MongoClientFactory()
            repository = MongoCurationRepository(factory.get_database()["curation"])
        else:
            raise ValueError(f"Unsupported curation backend: {backend}")

    return CurationContainer(
        repository=repository,
        store=CurationStore(repository),
        authenticator=EditorAuthenticator(settings.editor_token),
    )
