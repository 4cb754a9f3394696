"""Snippet and style persistence on top of a key-value backend.

Two keys are used: "snippets" holds the list of snippet records and
"style" holds the style object. A missing key is read as the default
value, which is written back so later reads find it.
"""

import logging
from collections.abc import Callable, Sequence

from snipkeep.snippets.models import Snippet

from .backend import KeyValueBackend

logger = logging.getLogger(__name__)

SNIPPET_KEY = "snippets"
STYLE_KEY = "style"

# Type for durability callbacks: (succeeded) -> None
PersistCallback = Callable[[bool], None]


def log_persist_outcome(succeeded: bool) -> None:
    logger.debug("Persist finished: %s", succeeded)


class StorageService:
    """Reads and writes snippets and the style object.

    Example:
        storage = StorageService(JsonFileBackend(path))
        snippets = storage.get_snippets()
        storage.save_snippets(snippets, on_success=..., on_rejected=...)
    """

    def __init__(self, backend: KeyValueBackend):
        self._backend = backend

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    def get_snippets(self) -> list[Snippet]:
        """Load all persisted snippets, writing an empty list if none exist."""
        if self._backend.contains_key(SNIPPET_KEY):
            records = self._backend.read(SNIPPET_KEY)
            logger.debug("Loaded %d snippet(s)", len(records))
            return [Snippet.from_dict(record) for record in records]

        self._backend.write(SNIPPET_KEY, [])
        return []

    def add_snippet(
        self, snippet: Snippet, on_rejected: PersistCallback | None = None
    ) -> None:
        """Prepend a snippet to the persisted list unless its id is present.

        A failed write is logged and reported through on_rejected.
        """
        records = self._read_records()
        if not any(record.get("id") == snippet.id for record in records):
            records.insert(0, snippet.to_dict())
        self._write_through(records, on_rejected)

    def remove_snippet(
        self, snippet_id: str, on_rejected: PersistCallback | None = None
    ) -> list[dict]:
        """Remove every persisted record with the given id.

        Returns:
            The remaining records.
        """
        records = [r for r in self._read_records() if r.get("id") != snippet_id]
        self._write_through(records, on_rejected)
        return records

    def save_snippets(
        self,
        snippets: Sequence[Snippet],
        on_success: PersistCallback = log_persist_outcome,
        on_rejected: PersistCallback = log_persist_outcome,
    ) -> None:
        """Replace the persisted collection and confirm durability.

        Failures never raise; they are reported through on_rejected.

        Args:
            snippets: Full collection in its current order.
            on_success: Called with True once the data is durable.
            on_rejected: Called with False if writing or syncing failed.
        """
        self._write_durably(
            SNIPPET_KEY, [s.to_dict() for s in snippets], on_success, on_rejected
        )

    def get_style_object(self, default_style: dict) -> dict:
        """Load the style object, storing default_style if none exists."""
        if self._backend.contains_key(STYLE_KEY):
            return self._backend.read(STYLE_KEY)
        return self._backend.write(STYLE_KEY, default_style)

    def save_style_object(
        self,
        style: dict,
        on_success: PersistCallback = log_persist_outcome,
        on_rejected: PersistCallback = log_persist_outcome,
    ) -> None:
        """Replace the persisted style object and confirm durability."""
        self._write_durably(STYLE_KEY, style, on_success, on_rejected)

    def _read_records(self) -> list[dict]:
        if self._backend.contains_key(SNIPPET_KEY):
            return list(self._backend.read(SNIPPET_KEY))
        return []

    def _write_durably(
        self,
        key: str,
        value: object,
        on_success: PersistCallback,
        on_rejected: PersistCallback,
    ) -> None:
        try:
            self._backend.write(key, value)
            persisted = self._backend.persist()
        except OSError as e:
            logger.warning("Failed to persist %s: %s", key, e)
            on_rejected(False)
            return

        if persisted:
            on_success(True)
        else:
            on_rejected(False)

    def _write_through(
        self, records: list[dict], on_rejected: PersistCallback | None
    ) -> None:
        try:
            self._backend.write(SNIPPET_KEY, records)
        except OSError as e:
            logger.warning("Failed to write %s: %s", SNIPPET_KEY, e)
            if on_rejected is not None:
                on_rejected(False)
