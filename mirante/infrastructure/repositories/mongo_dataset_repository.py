"""Repositório do dataset histórico com persistência em MongoDB."""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from mirante.domain import (
    Article,
    DatasetPage,
    DatasetQuery,
    DatasetRecord,
    DatasetRepository,
    DatasetStats,
    StoreError,
    UpsertResult,
)
from mirante.domain.entities.dataset import SORT_FIRST_SEEN

from .dataset_indexes import ensure_dataset_indexes

TOP_SOURCES_LIMIT = 20


class MongoDatasetRepository(DatasetRepository):
    """Gerencia a coleção de artigos coletados, uma linha por URL."""

    def __init__(self, collection: Collection, *, create_indexes: bool = True) -> None:
        self._collection: Collection = collection
        """Coleção MongoDB que armazena as linhas do dataset."""

        self._log = logging.getLogger("mirante.dataset")

        if create_indexes:
            ensure_dataset_indexes(collection)

    def upsert(
        self,
        articles: Iterable[Article],
        region: str,
        *,
        now: datetime | None = None,
    ) -> UpsertResult:
        """Insere URLs inéditas e atualiza as já vistas sem apagar dados.

        Campos mutáveis (título, descrição, imagem, categoria e tempo de
        leitura) só são substituídos quando o novo valor não é vazio.
        """

        timestamp = (now or datetime.now(timezone.utc)).isoformat()
        inserted = 0
        updated = 0
        for article in articles:
            if not article.url:
                continue
            update = self._build_update(article, region or "global", timestamp)
            try:
                if self._upsert_one(article.url, update):
                    inserted += 1
                else:
                    updated += 1
            except PyMongoError as exc:
                raise StoreError(
                    f"Falha ao gravar artigo {article.url} no dataset: {exc}"
                ) from exc
        return UpsertResult(inserted=inserted, updated=updated)

    def query(self, query: DatasetQuery) -> DatasetPage:
        criteria = self._build_criteria(query)
        sort_field = "first_seen_at" if query.sort == SORT_FIRST_SEEN else "published_at"
        try:
            total = self._collection.count_documents(criteria)
            cursor = (
                self._collection.find(criteria, {"_id": 0})
                .sort(sort_field, DESCENDING)
                .skip(query.offset)
                .limit(query.limit)
            )
            records = tuple(self._deserialize(document) for document in cursor)
        except PyMongoError as exc:
            raise StoreError(f"Falha ao consultar o dataset: {exc}") from exc
        return DatasetPage(records=records, total=total)

    def stats(self) -> DatasetStats:
        try:
            return DatasetStats(
                total=self._collection.count_documents({}),
                earliest=self._edge_value("published_at", ASCENDING),
                latest=self._edge_value("published_at", DESCENDING),
                first_seen=self._edge_value("first_seen_at", ASCENDING),
                by_category=self._count_by("category"),
                by_region=self._count_by("region"),
                by_source=self._count_by("source", limit=TOP_SOURCES_LIMIT),
            )
        except PyMongoError as exc:
            raise StoreError(f"Falha ao calcular estatísticas do dataset: {exc}") from exc

    def _upsert_one(self, url: str, update: dict[str, Any]) -> bool:
        """Executa o upsert atômico e informa se a linha foi criada."""

        try:
            result = self._collection.update_one({"url": url}, update, upsert=True)
        except DuplicateKeyError:
            # Outro upsert concorrente criou a linha primeiro; vira atualização.
            self._log.debug("Upsert concorrente para %s, repetindo como atualização", url)
            self._collection.update_one({"url": url}, {"$set": update["$set"]})
            return False
        return result.upserted_id is not None

    @staticmethod
    def _build_update(article: Article, region: str, timestamp: str) -> dict[str, Any]:
        mutable = {
            "title": article.title,
            "description": article.description,
            "image": article.image,
            "category": article.category,
            "read_time": article.read_time,
        }
        to_set: dict[str, Any] = {"last_seen_at": timestamp}
        on_insert: dict[str, Any] = {
            "url": article.url,
            "source": article.source or None,
            "author": article.author or None,
            "published_at": article.published_at or None,
            "region": region,
            "first_seen_at": timestamp,
        }
        for field_name, value in mutable.items():
            if value is None or value == "":
                on_insert[field_name] = value if field_name == "title" else None
            else:
                to_set[field_name] = value
        return {"$set": to_set, "$setOnInsert": on_insert}

    @staticmethod
    def _build_criteria(query: DatasetQuery) -> dict[str, Any]:
        criteria: dict[str, Any] = {}
        if query.category:
            criteria["category"] = query.category
        if query.region:
            criteria["region"] = query.region
        if query.source:
            criteria["source"] = {"$regex": re.escape(query.source), "$options": "i"}
        published: dict[str, str] = {}
        if query.published_from:
            published["$gte"] = query.published_from
        if query.published_to:
            published["$lte"] = query.published_to
        if published:
            criteria["published_at"] = published
        if query.search:
            pattern = {"$regex": re.escape(query.search), "$options": "i"}
            criteria["$or"] = [{"title": pattern}, {"description": pattern}]
        return criteria

    def _edge_value(self, field_name: str, direction: int) -> str | None:
        cursor = (
            self._collection.find({field_name: {"$ne": None}}, {"_id": 0, field_name: 1})
            .sort(field_name, direction)
            .limit(1)
        )
        for document in cursor:
            return document.get(field_name)
        return None

    def _count_by(
        self, field_name: str, *, limit: int | None = None
    ) -> tuple[tuple[str | None, int], ...]:
        pipeline: list[dict[str, Any]] = [
            {"$group": {"_id": f"${field_name}", "count": {"$sum": 1}}},
            {"$sort": {"count": -1, "_id": 1}},
        ]
        if limit:
            pipeline.append({"$limit": limit})
        return tuple(
            (row.get("_id"), int(row.get("count", 0)))
            for row in self._collection.aggregate(pipeline)
        )

    @staticmethod
    def _deserialize(data: Mapping[str, Any]) -> DatasetRecord:
        return DatasetRecord(
            url=data["url"],
            title=data.get("title") or "",
            source=data.get("source"),
            author=data.get("author"),
            description=data.get("description"),
            image=data.get("image"),
            published_at=data.get("published_at"),
            category=data.get("category"),
            read_time=data.get("read_time"),
            region=data.get("region") or "global",
            first_seen_at=data["first_seen_at"],
            last_seen_at=data["last_seen_at"],
        )


__all__ = ["MongoDatasetRepository"]
