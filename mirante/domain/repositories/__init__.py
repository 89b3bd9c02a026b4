"""Contratos de repositórios do domínio."""

from .curation_repository import CurationRepository
from .dataset_repository import DatasetRepository

__all__ = ["CurationRepository", "DatasetRepository"]
