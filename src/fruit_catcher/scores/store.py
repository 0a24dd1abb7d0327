from __future__ import annotations

import json
import logging
import os
import shutil
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..exceptions import StorageError
from ..platform.paths import ensure_exists, get_scores_path

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable string storage with get/set semantics."""

    def get(self, key: str) -> Optional[str]:  # pragma: no cover - interface
        ...

    def set(self, key: str, value: str) -> None:  # pragma: no cover - interface
        ...


class MemoryStore:
    """In-process store; contents are lost with the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)


class JsonFileStore:
    """Key-value store persisted as a single JSON object on disk.

    Writes are atomic (tmp file + fsync + rename) and keep a ``.bak`` copy of
    the previous file. Reads fall back to the backup when the primary file is
    unreadable. Any failure is raised as :class:`StorageError`.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else get_scores_path()
        self.lock = threading.RLock()

    @property
    def backup_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".bak")

    def get(self, key: str) -> Optional[str]:
        with self.lock:
            value = self._read_all().get(key)
            return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        with self.lock:
            try:
                data = self._read_all()
            except StorageError:
                logger.warning("Store %s unreadable; rewriting from scratch", self.path)
                data = {}
            data[key] = str(value)
            self._atomic_write(json.dumps(data, ensure_ascii=False, sort_keys=True, indent=2))

    # Internal utilities

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists() and not self.backup_path.exists():
            return {}
        try:
            return self._read_file(self.path)
        except StorageError as primary:
            if self.backup_path.exists():
                logger.warning("Primary store %s unreadable (%s); using backup", self.path, primary)
                return self._read_file(self.backup_path)
            raise

    @staticmethod
    def _read_file(path: Path) -> Dict[str, str]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot read store file {path}: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in store file {path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Store file {path} does not contain a JSON object")
        return data

    def _atomic_write(self, text: str) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            ensure_exists(self.path.parent)
            with tmp.open("w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                shutil.copy2(str(self.path), str(self.backup_path))
            os.replace(str(tmp), str(self.path))
        except OSError as e:
            raise StorageError(f"Cannot write store file {self.path}: {e}") from e


__all__ = ["KeyValueStore", "MemoryStore", "JsonFileStore"]
