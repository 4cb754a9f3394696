"""Key-value persistence backends.

The snippet engine only needs a small key-value surface: check a key,
read it, write it, and confirm durability. Two backends are provided:

- MemoryBackend: a dict, for tests and throwaway sessions.
- JsonFileBackend: all keys in one JSON document on disk.

JsonFileBackend writes atomically (tmp file -> rename) so a crash mid-write
never leaves a truncated document behind.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    """Storage surface required by StorageService."""

    def contains_key(self, key: str) -> bool: ...

    def read(self, key: str) -> Any: ...

    def write(self, key: str, value: Any) -> Any: ...

    def persist(self) -> bool: ...


class MemoryBackend:
    """In-memory backend. Values are JSON round-tripped like on disk."""

    def __init__(self, initial: dict | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.write(key, value)

    def contains_key(self, key: str) -> bool:
        return bool(self._data.get(key))

    def read(self, key: str) -> Any:
        raw = self._data.get(key)
        return json.loads(raw) if raw else None

    def write(self, key: str, value: Any) -> Any:
        self._data[key] = json.dumps(value)
        return value

    def persist(self) -> bool:
        return True


class JsonFileBackend:
    """Backend storing every key in a single JSON document.

    Example:
        backend = JsonFileBackend(Path("~/.config/snipkeep/snippets.json"))
        if not backend.contains_key("snippets"):
            backend.write("snippets", [])
    """

    def __init__(self, path: Path):
        """Initialize the backend.

        Args:
            path: Location of the JSON document. Parent directories are
                  created on first write.
        """
        self._path = path.expanduser()
        self._document: dict | None = None

    @property
    def path(self) -> Path:
        """Get the path of the backing document."""
        return self._path

    def _load(self) -> dict:
        if self._document is not None:
            return self._document

        if not self._path.exists():
            self._document = {}
            return self._document

        try:
            document = json.loads(self._path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            # Unreadable document - treat as empty rather than failing startup
            logger.warning("Ignoring unreadable data file %s: %s", self._path, e)
            document = {}

        self._document = document if isinstance(document, dict) else {}
        return self._document

    def contains_key(self, key: str) -> bool:
        return self._load().get(key) is not None

    def read(self, key: str) -> Any:
        return self._load().get(key)

    def write(self, key: str, value: Any) -> Any:
        """Store a value and write the whole document to disk.

        Raises:
            OSError: If the document cannot be written.
        """
        document = self._load()
        document[key] = value
        self._write_document(document)
        return value

    def persist(self) -> bool:
        """Flush the document to stable storage.

        Returns:
            True once the file contents are synced to disk.

        Raises:
            OSError: If the file cannot be opened or synced.
        """
        if not self._path.exists():
            self._write_document(self._load())

        fd = os.open(self._path, os.O_RDONLY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
        return True

    def _write_document(self, document: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(document, indent=2))
        tmp_path.replace(self._path)
        logger.debug("Wrote %d key(s) to %s", len(document), self._path)
