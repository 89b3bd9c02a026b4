"""Utilitários para criação de índices da coleção do dataset."""
from __future__ import annotations

from pymongo.collection import Collection
from pymongo.errors import OperationFailure

_INDEX_CONFLICT_CODES = {85, 86}


def ensure_dataset_indexes(collection: Collection) -> None:
    """Garante que todos os índices necessários para o dataset existam.

    Índices equivalentes criados anteriormente com outro nome são mantidos.
    """

    definitions: tuple[tuple[list[tuple[str, int]], dict[str, object]], ...] = (
        ([("url", 1)], {"name": "url_unique", "unique": True}),
        ([("published_at", -1)], {"name": "published_at_desc"}),
        ([("category", 1)], {"name": "category"}),
        ([("region", 1)], {"name": "region"}),
        ([("first_seen_at", -1)], {"name": "first_seen_at_desc"}),
    )

    for keys, options in definitions:
        try:
            collection.create_index(keys, **options)
        except OperationFailure as exc:
            if exc.code not in _INDEX_CONFLICT_CODES:
                raise


__all__ = ["ensure_dataset_indexes"]
