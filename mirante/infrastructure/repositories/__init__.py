"""Implementações concretas dos repositórios."""

from .dataset_indexes import ensure_dataset_indexes
from .json_curation_repository import JsonCurationRepository
from .mongo_curation_repository import MongoCurationRepository
from .mongo_dataset_repository import MongoDatasetRepository

__all__ = [
    "JsonCurationRepository",
    "MongoCurationRepository",
    "MongoDatasetRepository",
    "ensure_dataset_indexes",
]
