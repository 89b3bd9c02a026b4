"""Persistência do estado de curadoria em um único documento MongoDB."""
from __future__ import annotations

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from mirante.domain import CurationRepository, CurationState, StoreError

CURATION_DOCUMENT_ID = "curation"


class MongoCurationRepository(CurationRepository):
    """Guarda ``hidden`` e ``pinned`` em um documento de identificador fixo."""

    def __init__(self, collection: Collection) -> None:
        self._collection: Collection = collection

    def load(self) -> CurationState:
        try:
            document = self._collection.find_one({"_id": CURATION_DOCUMENT_ID})
        except PyMongoError as exc:
            raise StoreError(f"Falha ao carregar curadoria: {exc}") from exc
        return CurationState.from_mapping(document or {})

    def save(self, state: CurationState) -> None:
        document = {"_id": CURATION_DOCUMENT_ID, **state.to_mapping()}
        try:
            self._collection.replace_one(
                {"_id": CURATION_DOCUMENT_ID}, document, upsert=True
            )
        except PyMongoError as exc:
            raise StoreError(f"Falha ao gravar curadoria: {exc}") from exc


__all__ = ["CURATION_DOCUMENT_ID", "MongoCurationRepository"]
