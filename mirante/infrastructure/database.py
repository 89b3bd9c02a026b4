"""Conexão compartilhada com o MongoDB usada pela curadoria e pelo dataset."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from pymongo import MongoClient
from pymongo.database import Database

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_MONGO_DATABASE = "mirante"


@dataclass(frozen=True)
class MongoSettings:
    """Endereço, banco e tempo máximo de seleção de servidor."""

    uri: str = DEFAULT_MONGO_URI
    database: str = DEFAULT_MONGO_DATABASE
    server_selection_timeout_ms: int = 5000

    @classmethod
    def from_env(cls) -> "MongoSettings":
        return cls(
            uri=os.getenv("MONGO_URI") or DEFAULT_MONGO_URI,
            database=os.getenv("MONGO_DATABASE") or DEFAULT_MONGO_DATABASE,
            server_selection_timeout_ms=int(
                os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000")
            ),
        )


class MongoClientFactory:
    """Cria o ``MongoClient`` sob demanda e o reaproveita até ``close``."""

    def __init__(
        self,
        settings: MongoSettings | None = None,
        *,
        client_class: type[MongoClient] = MongoClient,
    ) -> None:
        self._settings = settings or MongoSettings.from_env()
        self._client_class = client_class
        self._client: MongoClient | None = None
        self._log = logging.getLogger("mirante.database")

    def create_client(self) -> MongoClient:
        if self._client is None:
            self._log.debug("Conectando ao MongoDB em %s", self._settings.database)
            self._client = self._client_class(
                self._settings.uri,
                serverSelectionTimeoutMS=self._settings.server_selection_timeout_ms,
            )
        return self._client

    def get_database(self) -> Database:
        return self.create_client()[self._settings.database]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


__all__ = ["MongoClientFactory", "MongoSettings"]
