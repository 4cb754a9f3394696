"""Backing collection of snippets with a single-step undo stack.

The store owns two lists:

- snippets: the authoritative collection, in display order.
- deleted: removed snippets, most recent first, used by undo.

Every insertion and removal is written through to the StorageService.
Memory is updated first, so a failed write never leaves a snippet both
live and on the deleted stack.
"""

import logging
import uuid
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .models import Snippet

if TYPE_CHECKING:
    from snipkeep.storage.service import PersistCallback, StorageService

logger = logging.getLogger(__name__)


class SnippetNotFoundError(KeyError):
    """No live snippet has the requested id."""

    pass


class SnippetStore:
    """Ordered snippet collection plus the deleted stack.

    Example:
        store = SnippetStore(storage)
        store.add(Snippet(title="Read a file", code="open(path).read()"))
        store.delete(store.snippets[0].id)
        restored = store.undo()
    """

    def __init__(self, storage: "StorageService"):
        """Load the collection from storage.

        Records persisted without an id get a fresh one, and the collection
        is written back so later removals find them.

        Args:
            storage: Persistence for the collection.
        """
        self._storage = storage
        self.snippets: list[Snippet] = storage.get_snippets()
        self.deleted: list[Snippet] = []

        missing = [s for s in self.snippets if not s.id]
        for snippet in missing:
            snippet.id = self.create_id()
        if missing:
            logger.info("Assigned ids to %d stored snippet(s)", len(missing))
            storage.save_snippets(self.snippets)

    def create_id(self) -> str:
        """Generate an id not held by any live or deleted snippet."""
        taken = {s.id for s in self.snippets} | {s.id for s in self.deleted}
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in taken:
                return candidate

    def add(
        self, snippet: Snippet, on_rejected: "PersistCallback | None" = None
    ) -> Snippet:
        """Assign a fresh id, prepend the snippet and persist it."""
        snippet.id = self.create_id()
        return self.restore(snippet, on_rejected)

    def restore(
        self, snippet: Snippet, on_rejected: "PersistCallback | None" = None
    ) -> Snippet:
        """Prepend a snippet keeping its current id, and persist it.

        The snippet is live before the write; a failed write is only
        reported through on_rejected.
        """
        self.snippets.insert(0, snippet)
        logger.debug("Inserted snippet %s", snippet.id)
        self._storage.add_snippet(snippet, on_rejected)
        return snippet

    def prepend_many(self, snippets: Iterable[Snippet]) -> None:
        """Put snippets at the front of the collection, keeping their order.

        Does not persist; callers save the whole collection afterwards.
        """
        self.snippets[:0] = list(snippets)

    def delete(
        self, snippet_id: str, on_rejected: "PersistCallback | None" = None
    ) -> list[Snippet]:
        """Move every snippet with the given id onto the deleted stack.

        Returns:
            The removed snippets (normally exactly one).
        """
        removed = [s for s in self.snippets if s.id == snippet_id]
        self.snippets = [s for s in self.snippets if s.id != snippet_id]
        self.deleted[:0] = removed
        logger.debug("Deleted %d snippet(s) with id %s", len(removed), snippet_id)
        self._storage.remove_snippet(snippet_id, on_rejected)
        return removed

    def undo(self, on_rejected: "PersistCallback | None" = None) -> Snippet | None:
        """Re-insert the most recently deleted snippet with its original id.

        Returns:
            The restored snippet, or None if nothing was deleted.
        """
        if not self.deleted:
            return None
        return self.restore(self.deleted.pop(0), on_rejected)

    def by_id(self, snippet_id: str) -> Snippet | None:
        """Find the first live snippet with the given id."""
        return next((s for s in self.snippets if s.id == snippet_id), None)

    def require(self, snippet_id: str) -> Snippet:
        """Like by_id, but an unknown id is a caller error.

        Raises:
            SnippetNotFoundError: If no live snippet has this id.
        """
        snippet = self.by_id(snippet_id)
        if snippet is None:
            raise SnippetNotFoundError(snippet_id)
        return snippet
