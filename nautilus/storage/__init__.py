"""Persistent key-value storage for theme preferences.

This module provides a small text store abstraction with memory and JSON
file backends, plus ``PersistentStore``, the typed layer the theme state
reads from and writes through. Persistence is best effort: read failures
return the caller's default and write failures are logged and dropped.

Example:
    >>> from nautilus.storage import JsonFileStore, PersistentStore
    >>> store = PersistentStore(JsonFileStore("~/.nautilus/theme.json"))
    >>> store.write("nautilus-theme-preset", "ocean")
    >>> store.read("nautilus-theme-preset", "default")
    'ocean'
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Storage keys
PRESET_KEY = "nautilus-theme-preset"
CUSTOM_THEME_KEY = "nautilus-custom-theme"

# Default theme file
DEFAULT_THEME_FILE = Path.home() / ".nautilus" / "theme.json"


class TextStore(ABC):
    """Abstract base class for string-keyed text stores."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get the stored text for a key.

        Args:
            key: Storage key

        Returns:
            Stored text, or None if the key is absent
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Text to store
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key if present.

        Args:
            key: Storage key
        """
        pass


class MemoryStore(TextStore):
    """In-memory text store.

    Example:
        >>> store = MemoryStore()
        >>> store.set("key", '"value"')
        >>> store.get("key")
        '"value"'
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(TextStore):
    """Text store backed by a single JSON document on disk.

    All keys live in one JSON object; the file is rewritten on every
    change. A file that cannot be parsed is treated as empty.

    Example:
        >>> store = JsonFileStore(tmp_dir / "theme.json")
        >>> store.set("nautilus-theme-preset", '"forest"')
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize file store.

        Args:
            path: JSON file path (defaults to ~/.nautilus/theme.json)
        """
        self.path = Path(path).expanduser() if path else DEFAULT_THEME_FILE

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, RecursionError) as e:
            logger.warning("Ignoring unreadable theme file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring theme file %s: top level is not an object", self.path)
            return {}
        return data

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class PersistentStore:
    """Typed, failure-tolerant access to a ``TextStore``.

    Values are JSON encoded before they reach the backend. Any failure
    while reading (missing key, malformed JSON, a decoder that rejects the
    value, an unavailable backend) is logged and answered with the
    supplied default. Write failures are logged and discarded.
    """

    def __init__(self, backend: TextStore) -> None:
        self.backend = backend

    def read(
        self,
        key: str,
        default: T,
        decode: Callable[[Any], T] | None = None,
    ) -> T:
        """Read and decode a stored value.

        Args:
            key: Storage key
            default: Value returned when nothing usable is stored
            decode: Optional converter applied to the parsed JSON; raising
                from it marks the stored value as malformed

        Returns:
            The decoded value, or ``default``
        """
        try:
            raw = self.backend.get(key)
        except Exception as e:
            logger.warning("Failed to read %r from storage: %s", key, e)
            return default

        if raw is None:
            return default

        try:
            value = json.loads(raw)
            return decode(value) if decode is not None else value
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            logger.warning("Discarding malformed value stored under %r: %s", key, e)
            return default

    def write(self, key: str, value: Any) -> bool:
        """Encode and store a value.

        Returns:
            True if the backend accepted the write
        """
        try:
            self.backend.set(key, json.dumps(value))
        except Exception as e:
            logger.warning("Failed to write %r to storage: %s", key, e)
            return False
        return True


__all__ = [
    # Backends
    "TextStore",
    "MemoryStore",
    "JsonFileStore",
    # Typed access
    "PersistentStore",
    # Constants
    "PRESET_KEY",
    "CUSTOM_THEME_KEY",
    "DEFAULT_THEME_FILE",
]
