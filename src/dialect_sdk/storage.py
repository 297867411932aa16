"""
Key/value backing storage for tokens and encryption keys.

Three backends mirror the storage choices a browser wallet gets:

- ``InMemoryStorage``: private to one store instance.
- ``SessionStorage``: shared by every store in the current process and
  gone when the process exits.
- ``LocalStorage``: durable JSON file, ``~/.dialect/storage.json`` by default.
"""
from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Literal, Optional

logger = logging.getLogger(__name__)

StorageType = Literal["in-memory", "session-storage", "local-storage"]

DEFAULT_LOCAL_STORAGE_PATH = Path.home() / ".dialect" / "storage.json"


class Storage(ABC):
    """Abstract string key/value storage."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Get a value by key."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a value if present."""
        pass


class InMemoryStorage(Storage):
    """Storage held in a plain dict owned by this instance."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SessionStorage(Storage):
    """Process-scoped storage shared by all instances."""

    _items: Dict[str, str] = {}
    _lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    @classmethod
    def clear(cls) -> None:
        with cls._lock:
            cls._items.clear()


class LocalStorage(Storage):
    """Durable storage in a JSON file.

    The file is read on first access and written on every change, so
    creating an instance never touches the filesystem.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path else DEFAULT_LOCAL_STORAGE_PATH
        self._items: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        if self._items is None:
            try:
                self._items = json.loads(self._path.read_text(encoding="utf-8"))
            except FileNotFoundError:
                self._items = {}
            except json.JSONDecodeError:
                logger.warning("Ignoring corrupt local storage file %s", self._path)
                self._items = {}
        return self._items

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._items, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._load()[key] = value
            self._flush()

    def remove_item(self, key: str) -> None:
        with self._lock:
            if self._load().pop(key, None) is not None:
                self._flush()
