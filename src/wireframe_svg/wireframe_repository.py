from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from .errors import WireframeNotFoundError
from .models.wireframe import Wireframe

logger = logging.getLogger(__name__)


class WireframeRepository(Protocol):
    def get(self, *, record_id: str) -> Wireframe:
        ...


class LocalWireframeRepository:
    """Wireframe documents stored as ``<record_id>.json`` under one directory.

    Record ids are file stems; an id that resolves outside ``base_path`` is
    treated as missing.
    """

    def __init__(self, *, base_path: Path) -> None:
        self._base_path = base_path.resolve()

    def get(self, *, record_id: str) -> Wireframe:
        file_path = self._path_for(record_id)
        if file_path is None or not file_path.is_file():
            raise WireframeNotFoundError(f"Wireframe document not found: {record_id}")
        data = json.loads(file_path.read_text(encoding="utf-8"))
        logger.debug("Loaded wireframe document", extra={"record_id": record_id, "path": str(file_path)})
        return Wireframe.model_validate(data)

    def _path_for(self, record_id: str) -> Path | None:
        if not record_id:
            return None
        file_path = (self._base_path / f"{record_id}.json").resolve()
        if file_path.parent != self._base_path:
            return None
        return file_path


__all__ = ["LocalWireframeRepository", "WireframeRepository"]
