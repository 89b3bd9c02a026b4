"""Persistência do estado de curadoria em um arquivo JSON."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from mirante.domain import CurationRepository, CurationState, StoreError


class JsonCurationRepository(CurationRepository):
    """Lê e grava ``{"hidden": [...], "pinned": [...]}`` em disco."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._log = logging.getLogger("mirante.curation")

    def load(self) -> CurationState:
        if not self._path.exists():
            return CurationState()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self._log.error(
                "Arquivo de curadoria %s ilegível, iniciando vazio: %s", self._path, exc
            )
            return CurationState()
        if not isinstance(data, dict):
            return CurationState()
        return CurationState.from_mapping(data)

    def save(self, state: CurationState) -> None:
        """Grava em arquivo temporário e substitui o original de forma atômica."""

        payload = json.dumps(state.to_mapping(), ensure_ascii=False, indent=2)
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as stream:
                tmp_name = stream.name
                stream.write(payload)
                stream.flush()
                os.fsync(stream.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise StoreError(f"Falha ao gravar curadoria em {self._path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass


__all__ = ["JsonCurationRepository"]
