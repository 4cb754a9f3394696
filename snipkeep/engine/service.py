"""Snippet service: the mutation protocol over store, views and storage.

Every public mutation runs to completion under one lock and follows the
same sequence: mutate the store, recompute the dependent views, publish
them, then push exactly one toast.

| operation | views refreshed   | toast             |
|-----------|-------------------|-------------------|
| add       | visible, pinned   | SNIPPET_ADDED     |
| delete    | visible, pinned   | SNIPPET_DELETED   |
| undo      | visible, pinned   | SNIPPET_RESTORED  |
| pin/unpin | pinned            | none              |
| search    | visible           | SEARCH_COMPLETED  |
| import    | visible, pinned   | IMPORT_SUCCEEDED  |
| save      | none              | SAVE_SUCCEEDED / SAVE_FAILED |

The in-memory collection is authoritative as soon as it is mutated; the
outcome of a durable save only changes which toast is shown. A failed
write-through during add, delete or undo additionally pushes SAVE_FAILED.
"""

import logging
import threading
from collections.abc import Callable, Sequence

from snipkeep.events.hotkeys import HotKey, HotKeyService
from snipkeep.events.subject import BehaviorSubject, Subscription
from snipkeep.events.toast import Toast, ToastService
from snipkeep.search.engine import search_snippets
from snipkeep.search.models import SearchOutcome, SearchParameters
from snipkeep.snippets.models import Snippet, now_millis
from snipkeep.snippets.ordering import sort_snippets
from snipkeep.snippets.store import SnippetStore
from snipkeep.storage.service import StorageService

from .autosave import AutosaveTimer
from .views import DEFAULT_PAGE_SIZE, SnippetView, ViewMaterializer

logger = logging.getLogger(__name__)

# Seconds between background saves of the whole collection
DEFAULT_SAVE_INTERVAL = 200.0


class SnippetService:
    """Engine behind every snippet operation.

    Example:
        service = SnippetService(storage, ToastService(), HotKeyService())
        service.add_snippet(Snippet(title="Read a file", code="open(p).read()"))
        service.search(SearchParameters(query="file"))
        service.close()
    """

    def __init__(
        self,
        storage: StorageService,
        toasts: ToastService,
        hotkeys: HotKeyService,
        page_size: int = DEFAULT_PAGE_SIZE,
        save_interval: float | None = DEFAULT_SAVE_INTERVAL,
    ):
        """Load the collection and start listening.

        Args:
            storage: Persistence for snippets.
            toasts: Sink for user-facing notifications.
            hotkeys: Source of undo requests.
            page_size: Number of snippets on the first visible page.
            save_interval: Seconds between background saves, or None/0
                           to disable autosave.
        """
        self._lock = threading.RLock()
        self._storage = storage
        self._toasts = toasts
        self._closed = False

        self._store = SnippetStore(storage)
        # No search is active yet, so everything loaded is showing
        for snippet in self._store.snippets:
            snippet.showing = True
        sort_snippets(self._store.snippets)

        self._views = ViewMaterializer(self._store.snippets, page_size)
        self._search: BehaviorSubject[SearchParameters] = BehaviorSubject(
            SearchParameters(), distinct=True
        )

        self._autosave: AutosaveTimer | None = None
        if save_interval:
            self._autosave = AutosaveTimer(save_interval, self.save_snippets)
            self._autosave.start()

        self._hotkey_subscription = hotkeys.pull(self._on_hotkey)

    # --- views ---

    @property
    def store(self) -> SnippetStore:
        return self._store

    @property
    def visible_snippets(self) -> SnippetView:
        return self._views.visible

    @property
    def pinned_snippets(self) -> SnippetView:
        return self._views.pinned

    @property
    def search_parameters(self) -> SearchParameters:
        return self._search.value

    def get_snippet_list(
        self, observer: Callable[[SnippetView], None]
    ) -> Subscription:
        """Subscribe to the visible view."""
        return self._views.subscribe_visible(observer)

    def get_pinned_snippets(
        self, observer: Callable[[SnippetView], None]
    ) -> Subscription:
        """Subscribe to the pinned view."""
        return self._views.subscribe_pinned(observer)

    def get_search_parameters(
        self, observer: Callable[[SearchParameters], None]
    ) -> Subscription:
        """Subscribe to the active search parameters."""
        return self._search.subscribe(observer)

    def get_all_snippets(self) -> list[Snippet]:
        return self._store.snippets

    def get_snippet_by_id(self, snippet_id: str) -> Snippet | None:
        return self._store.by_id(snippet_id)

    def refresh_pinned_snippets(self) -> None:
        """Recompute the pinned view, e.g. after a title was edited."""
        with self._lock:
            self._views.refresh_pinned(self._store.snippets)

    def load_remaining_snippets(self) -> None:
        with self._lock:
            self._views.load_remaining(self._store.snippets)

    def has_more_snippets(self, index: int) -> bool:
        with self._lock:
            return self._views.has_more(self._store.snippets, index)

    def on_pinned_snippet_selected(self, snippet_id: str) -> None:
        """Jump to a pinned snippet without re-running the search.

        Raises:
            SnippetNotFoundError: If the id is unknown.
        """
        with self._lock:
            self._views.promote(self._store.require(snippet_id))

    # --- mutations ---

    def add_snippet(self, snippet: Snippet) -> Snippet:
        """Insert a new snippet with a fresh id."""
        with self._lock:
            self._store.add(snippet, self._on_write_failed)
            self._views.prepend_visible(snippet)
            self._views.refresh_pinned(self._store.snippets)
            self._push(Toast.SNIPPET_ADDED)
            return snippet

    def delete_snippet(self, snippet_id: str) -> list[Snippet]:
        """Remove a snippet, keeping it on the undo stack."""
        with self._lock:
            removed = self._store.delete(snippet_id, self._on_write_failed)
            self._views.refresh_visible(self._store.snippets)
            self._views.refresh_pinned(self._store.snippets)
            self._push(Toast.SNIPPET_DELETED)
            return removed

    def undo_delete(self) -> bool:
        """Restore the most recently deleted snippet with its original id.

        Returns:
            True if a snippet was restored, False if nothing was deleted.
        """
        with self._lock:
            snippet = self._store.undo(self._on_write_failed)
            if snippet is None:
                return False
            self._views.prepend_visible(snippet)
            self._views.refresh_pinned(self._store.snippets)
            self._push(Toast.SNIPPET_RESTORED)
            return True

    def pin_snippet(self, snippet_id: str) -> None:
        """Raises SnippetNotFoundError for an unknown id."""
        self._set_pinned(snippet_id, True)

    def unpin_snippet(self, snippet_id: str) -> None:
        """Raises SnippetNotFoundError for an unknown id."""
        self._set_pinned(snippet_id, False)

    def search(
        self, params: SearchParameters, save_search: bool = True
    ) -> SearchOutcome:
        """Score and reorder the collection, then refresh the visible view.

        Args:
            params: The search request.
            save_search: Publish params as the active search parameters.

        Returns:
            SearchOutcome with per-snippet scores.
        """
        with self._lock:
            if save_search:
                self._search.next(params)
            outcome = search_snippets(self._store.snippets, params)
            self._views.refresh_visible(self._store.snippets)
            self._push(Toast.SEARCH_COMPLETED)
            logger.debug("Search %r matched %d snippet(s)", params.query, outcome.matched)
            return outcome

    def import_snippets(self, imported: Snippet | Sequence[Snippet]) -> list[Snippet]:
        """Import one snippet or a batch, newest first, ahead of the collection.

        The batch is ordered by its own timestamps (newest first), then each
        snippet gets a fresh id and a timestamp just after now that keeps
        that order.

        Returns:
            The imported snippets in the order they were inserted.
        """
        batch = [imported] if isinstance(imported, Snippet) else list(imported)

        with self._lock:
            batch.sort(key=lambda s: s.timestamp, reverse=True)
            now = now_millis()
            for position, snippet in enumerate(batch):
                snippet.id = self._store.create_id()
                snippet.showing = True
                snippet.timestamp = now + (len(batch) - position)

            self._store.prepend_many(batch)
            self._storage.save_snippets(self._store.snippets)
            self._views.refresh_visible(self._store.snippets)
            self._views.refresh_pinned(self._store.snippets)
            self._push(Toast.IMPORT_SUCCEEDED)
            logger.info("Imported %d snippet(s)", len(batch))
            return batch

    def save_snippets(self) -> None:
        """Persist the whole collection; the outcome is reported as a toast."""
        with self._lock:
            self._storage.save_snippets(
                self._store.snippets,
                on_success=lambda _: self._push(Toast.SAVE_SUCCEEDED),
                on_rejected=lambda _: self._push(Toast.SAVE_FAILED),
            )

    def can_import(self, snippet_id: str) -> bool | None:
        """Duplicate detection hook. Not implemented: always unknown (None)."""
        return None

    def close(self) -> None:
        """Stop autosave and hotkey handling. No toasts are pushed afterwards."""
        if self._autosave is not None:
            self._autosave.cancel()
        with self._lock:
            self._closed = True
            self._hotkey_subscription.unsubscribe()

    # --- internals ---

    def _set_pinned(self, snippet_id: str, pinned: bool) -> None:
        with self._lock:
            self._store.require(snippet_id).pinned = pinned
            self._views.refresh_pinned(self._store.snippets)

    def _on_hotkey(self, hotkey: HotKey) -> None:
        if hotkey is HotKey.UNDO and not self._closed:
            self.undo_delete()

    def _push(self, toast: Toast) -> None:
        if not self._closed:
            self._toasts.push(toast)

    def _on_write_failed(self, _: bool) -> None:
        self._push(Toast.SAVE_FAILED)
