"""Infraestrutura de persistência do Mirante."""

from .database import MongoClientFactory, MongoSettings
from .repositories import (
    JsonCurationRepository,
    MongoCurationRepository,
    MongoDatasetRepository,
    ensure_dataset_indexes,
)

__all__ = [
    "JsonCurationRepository",
    "MongoClientFactory",
    "MongoCurationRepository",
    "MongoDatasetRepository",
    "MongoSettings",
    "ensure_dataset_indexes",
]
