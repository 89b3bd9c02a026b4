"""Rotinas de execução em lote para o dataset."""

from .collector_job import (
    CollectorRunResult,
    CollectorState,
    DatasetCollectorJob,
    RegionCollection,
)

__all__ = [
    "CollectorRunResult",
    "CollectorState",
    "DatasetCollectorJob",
    "RegionCollection",
]
