# src/nburate/adapters/persistence/kv_store.py
"""
Key-Value Store - Durable and In-Memory String Storage

This module defines the small storage interface the rate cache is written
against, with two implementations:
- InMemoryStore: a dict, for tests and one-off runs
- JsonFileStore: a single JSON object file on disk, durable across runs

Values are opaque strings; callers own their serialization. Several
components may share one store as long as each keeps to its own key prefix.

Files that USE this module:
- nburate.adapters.persistence.rate_cache (RateCache reads and writes entries)
- nburate.application.rates_service (build_rates_service opens the file store)

Files that this module USES:
- nburate.domain.errors (StorageError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from nburate.domain.errors import StorageError

log = logging.getLogger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or None."""
        raise NotImplementedError

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key``; return True if it existed."""
        raise NotImplementedError

    @abstractmethod
    def scan_prefix(self, prefix: str) -> List[str]:
        """Return the sorted keys starting with ``prefix``."""
        raise NotImplementedError


class InMemoryStore(KeyValueStore):
    """Dict-backed store; contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def scan_prefix(self, prefix: str) -> List[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStore(KeyValueStore):
    """
    Store persisted as one JSON object file.

    The whole file is read on first access and rewritten atomically on every
    change (temporary file + rename), so a crash mid-write never leaves a
    truncated file behind.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the file store.

        Args:
            path: Location of the JSON file (created on first write)
        """
        self.path = Path(path)
        self._data: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._data is not None:
            return self._data

        self._data = {}
        if not self.path.exists():
            return self._data

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._backup_corrupt(e)
            return self._data
        except OSError as e:
            self._data = None
            raise StorageError(f"Failed to read store file {self.path}: {e}") from e

        if not isinstance(data, dict):
            self._backup_corrupt(f"expected a JSON object, got {type(data).__name__}")
            return self._data

        # Non-string values are kept as their JSON text
        self._data = {
            str(k): v if isinstance(v, str) else json.dumps(v)
            for k, v in data.items()
        }
        return self._data

    def _backup_corrupt(self, reason) -> None:
        backup_path = self.path.with_suffix(self.path.suffix + ".corrupt")
        try:
            shutil.copy2(self.path, backup_path)
            self.path.unlink()
            log.warning("Store file corrupted, backed up to %s: %s", backup_path, reason)
        except OSError as e:
            log.error("Failed to back up corrupt store file %s: %s", self.path, e)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True,
        )
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, str(self.path))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to save store file {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def put(self, key: str, value: str) -> None:
        self._load()[key] = value
        self._save()

    def delete(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return False
        del data[key]
        self._save()
        return True

    def scan_prefix(self, prefix: str) -> List[str]:
        return sorted(k for k in self._load() if k.startswith(prefix))
