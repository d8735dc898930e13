"""
Khata Sync — Local Cache
==========================
A JSON file holding the last known document, so the ledger opens
offline and survives a failed cloud load.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from core.sync.errors import CacheError

logger = logging.getLogger("khata.sync")


class LocalCache:
    """
    Single-document cache on disk.

    Writes go to a temporary sibling first and are moved into place,
    so a crash mid-write leaves the previous copy readable.
    """

    def __init__(self, path: str | os.PathLike):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> Optional[dict]:
        """The cached document, or None when there is none yet."""
        if not self.exists():
            return None
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                document = json.load(handle)
        except (OSError, ValueError) as exc:
            raise CacheError(f"Cannot read cache {self._path}: {exc}") from exc
        if not isinstance(document, dict):
            raise CacheError(f"Cache {self._path} does not hold a JSON object.")
        return document

    def save(self, document: dict[str, Any]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(document, handle, ensure_ascii=False)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise CacheError(f"Cannot write cache {self._path}: {exc}") from exc
        logger.debug(f"Cache written to {self._path}")

    def clear(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass


class MemoryCache:
    """In-process cache used when no cache path is configured."""

    def __init__(self, document: Optional[dict] = None):
        self._document = document

    def exists(self) -> bool:
        return self._document is not None

    def load(self) -> Optional[dict]:
        return json.loads(json.dumps(self._document)) if self._document is not None else None

    def save(self, document: dict[str, Any]) -> None:
        self._document = json.loads(json.dumps(document))

    def clear(self) -> None:
        self._document = None
