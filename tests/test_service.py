"""Tests for the snippet service mutation protocol.

Each operation must update the store, refresh its views and push exactly
one toast.
"""

import threading
from unittest.mock import MagicMock

import pytest

from snipkeep.engine.autosave import AutosaveTimer
from snipkeep.engine.service import SnippetService
from snipkeep.events.hotkeys import HotKey, HotKeyService
from snipkeep.events.toast import Toast, ToastService
from snipkeep.search.models import SearchParameters
from snipkeep.snippets.models import Snippet
from snipkeep.snippets.store import SnippetNotFoundError
from snipkeep.storage.backend import MemoryBackend
from snipkeep.storage.service import SNIPPET_KEY, StorageService


def records(count: int) -> list[dict]:
    """Persisted records, newest first."""
    return [
        {"id": f"id{n}", "title": f"snippet {n}", "code": "pass", "timestamp": 1000 - n}
        for n in range(count)
    ]


@pytest.fixture
def toasts() -> ToastService:
    return ToastService()


@pytest.fixture
def hotkeys() -> HotKeyService:
    return HotKeyService()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def service(backend: MemoryBackend, toasts: ToastService, hotkeys: HotKeyService):
    """Create a service without autosave over an in-memory backend."""
    service = SnippetService(StorageService(backend), toasts, hotkeys, save_interval=None)
    yield service
    service.close()


def make_service(backend: MemoryBackend, toasts: ToastService, hotkeys: HotKeyService, **kwargs):
    kwargs.setdefault("save_interval", None)
    return SnippetService(StorageService(backend), toasts, hotkeys, **kwargs)


class TestInitialization:
    """Tests for loading the collection."""

    def test_sorts_loaded_snippets(self, toasts, hotkeys):
        backend = MemoryBackend({SNIPPET_KEY: [
            {"id": "old", "title": "old", "timestamp": 1},
            {"id": "new", "title": "new", "timestamp": 2},
            {"id": "first", "title": "first", "timestamp": 0, "index": -1},
        ]})
        service = make_service(backend, toasts, hotkeys)

        assert [s.id for s in service.get_all_snippets()] == ["first", "new", "old"]

    def test_stale_showing_flags_are_reset(self, toasts, hotkeys):
        backend = MemoryBackend({SNIPPET_KEY: [{"id": "a", "showing": False}]})
        service = make_service(backend, toasts, hotkeys)

        assert service.visible_snippets[0].id == "a"

    def test_no_toasts_on_startup(self, service: SnippetService, toasts: ToastService):
        assert toasts.history == []


class TestAddDeleteUndo:
    """Tests for add, delete and undo."""

    def test_add(self, service: SnippetService, toasts: ToastService):
        snippet = service.add_snippet(Snippet(title="new", pinned=True))

        assert service.get_all_snippets()[0] is snippet
        assert service.visible_snippets[0] is snippet
        assert service.pinned_snippets == (snippet,)
        assert toasts.history == [Toast.SNIPPET_ADDED]

    def test_delete(self, service: SnippetService, toasts: ToastService):
        snippet = service.add_snippet(Snippet(title="gone", pinned=True))

        service.delete_snippet(snippet.id)

        assert service.get_all_snippets() == []
        assert service.visible_snippets == ()
        assert service.pinned_snippets == ()
        assert toasts.history[-1] is Toast.SNIPPET_DELETED

    def test_delete_then_undo_roundtrip(self, service: SnippetService, toasts: ToastService):
        snippet = service.add_snippet(Snippet(title="t", code="c", tags="a, b"))
        original_id = snippet.id
        service.delete_snippet(original_id)

        assert service.undo_delete() is True

        restored = service.get_snippet_by_id(original_id)
        assert restored is not None
        assert (restored.title, restored.code, restored.tags) == ("t", "c", "a, b")
        assert service.store.deleted == []
        assert service.visible_snippets[0] is restored
        # Undo is one operation: only SNIPPET_RESTORED, no SNIPPET_ADDED
        assert toasts.history == [
            Toast.SNIPPET_ADDED,
            Toast.SNIPPET_DELETED,
            Toast.SNIPPET_RESTORED,
        ]

    def test_undo_on_empty_stack(self, service: SnippetService, toasts: ToastService):
        service.add_snippet(Snippet(title="a"))
        before = list(service.get_all_snippets())
        toasts.history.clear()

        assert service.undo_delete() is False
        assert service.get_all_snippets() == before
        assert service.store.deleted == []
        assert toasts.history == []

    def test_undo_hotkey(self, service: SnippetService, toasts: ToastService, hotkeys: HotKeyService):
        snippet = service.add_snippet(Snippet(title="a"))
        service.delete_snippet(snippet.id)

        hotkeys.push(HotKey.UNDO)

        assert service.get_snippet_by_id(snippet.id) is snippet
        assert toasts.history[-1] is Toast.SNIPPET_RESTORED

    def test_undo_hotkey_with_nothing_deleted(self, service, toasts, hotkeys):
        hotkeys.push(HotKey.UNDO)
        assert toasts.history == []

    def test_ids_unique_across_operations(self, service: SnippetService):
        for n in range(30):
            service.add_snippet(Snippet(title=str(n)))
        victim = service.get_all_snippets()[3]
        service.delete_snippet(victim.id)
        service.import_snippets([Snippet(title=f"imp {n}", timestamp=n) for n in range(30)])
        service.undo_delete()

        ids = [s.id for s in service.get_all_snippets()]
        assert len(ids) == 60
        assert len(set(ids)) == 60


class TestPinning:
    """Tests for pin, unpin and pinned selection."""

    def test_pin_and_unpin(self, backend, toasts, hotkeys):
        backend.write(SNIPPET_KEY, records(20))
        service = make_service(backend, toasts, hotkeys)

        service.pin_snippet("id15")
        assert [s.id for s in service.pinned_snippets] == ["id15"]

        service.unpin_snippet("id15")
        assert service.pinned_snippets == ()
        assert toasts.history == []

    def test_pin_unknown_id_raises(self, service: SnippetService):
        with pytest.raises(SnippetNotFoundError):
            service.pin_snippet("missing")
        with pytest.raises(SnippetNotFoundError):
            service.unpin_snippet("missing")

    def test_pinned_view_published(self, service: SnippetService):
        received = []
        service.get_pinned_snippets(received.append)

        snippet = service.add_snippet(Snippet(title="a"))
        service.pin_snippet(snippet.id)

        assert received[-1] == (snippet,)

    def test_selecting_pinned_snippet_promotes_it(self, backend, toasts, hotkeys):
        backend.write(SNIPPET_KEY, records(20))
        service = make_service(backend, toasts, hotkeys)
        service.search(SearchParameters(query="snippet 1,"))

        target = service.get_snippet_by_id("id15")
        target.showing = False
        service.on_pinned_snippet_selected("id15")

        assert service.visible_snippets[0] is target
        assert target.showing


class TestPagination:
    """Tests for the paginated visible view."""

    def test_page_and_load_remaining(self, backend, toasts, hotkeys):
        backend.write(SNIPPET_KEY, records(20))
        service = make_service(backend, toasts, hotkeys, page_size=12)

        assert [s.id for s in service.visible_snippets] == [f"id{n}" for n in range(12)]
        assert service.has_more_snippets(12)

        service.load_remaining_snippets()
        assert len(service.visible_snippets) == 20


class TestSearch:
    """Tests for search through the service."""

    def test_search_refreshes_visible_view(self, backend, toasts, hotkeys):
        backend.write(SNIPPET_KEY, records(20))
        service = make_service(backend, toasts, hotkeys)

        outcome = service.search(SearchParameters(query="snippet 19"))

        assert [s.id for s in service.visible_snippets] == ["id19"]
        assert outcome.matched == 1
        assert toasts.history == [Toast.SEARCH_COMPLETED]

    def test_search_parameters_published_once(self, service: SnippetService):
        received = []
        service.get_search_parameters(received.append)

        params = SearchParameters(query="x")
        service.search(params)
        service.search(SearchParameters(query="x"))
        service.search(SearchParameters(query="y"), save_search=False)

        assert received == [SearchParameters(), params]
        assert service.search_parameters == params

    def test_empty_search_restores_everything(self, backend, toasts, hotkeys):
        backend.write(SNIPPET_KEY, records(5))
        service = make_service(backend, toasts, hotkeys)

        service.search(SearchParameters(query="snippet 4"))
        service.search(SearchParameters(query=""))

        assert all(s.showing for s in service.get_all_snippets())
        assert [s.id for s in service.get_all_snippets()] == [f"id{n}" for n in range(5)]


class TestImport:
    """Tests for import_snippets()."""

    def test_batch_keeps_newest_first(self, service: SnippetService, toasts: ToastService):
        existing = service.add_snippet(Snippet(title="existing"))
        toasts.history.clear()
        older = Snippet(id="x", title="older", timestamp=50)
        newer = Snippet(id="x", title="newer", timestamp=100)

        service.import_snippets([older, newer])

        collection = service.get_all_snippets()
        assert [s.title for s in collection] == ["newer", "older", "existing"]
        assert newer.timestamp > older.timestamp > 100
        assert newer.id != older.id and "x" not in (newer.id, older.id)
        assert newer.showing and older.showing
        assert existing in collection
        assert toasts.history == [Toast.IMPORT_SUCCEEDED]

    def test_single_snippet(self, service: SnippetService, backend: MemoryBackend):
        snippet = Snippet(title="one", pinned=True)

        service.import_snippets(snippet)

        assert service.get_all_snippets() == [snippet]
        assert service.pinned_snippets == (snippet,)
        assert [r["id"] for r in backend.read(SNIPPET_KEY)] == [snippet.id]

    def test_imported_sorted_ahead_in_default_order(self, backend, toasts, hotkeys):
        backend.write(SNIPPET_KEY, records(3))
        service = make_service(backend, toasts, hotkeys)
        service.import_snippets([Snippet(title="a", timestamp=1), Snippet(title="b", timestamp=2)])

        service.search(SearchParameters(query=""))

        assert [s.title for s in service.get_all_snippets()[:2]] == ["b", "a"]

    def test_zero_timestamp_is_oldest(self, service: SnippetService):
        """A timestamp of 0 is a real value, not a missing one."""
        older = Snippet.from_dict({"title": "older", "code": "1", "timestamp": 0})
        newer = Snippet.from_dict({"title": "newer", "code": "2", "timestamp": 50})

        service.import_snippets([older, newer])

        assert [s.title for s in service.get_all_snippets()] == ["newer", "older"]

    def test_can_import_is_unknown(self, service: SnippetService):
        assert service.can_import("anything") is None


class TestWriteThroughFailures:
    """A failing backend write never raises out of a mutation."""

    def test_add_keeps_snippet(self, service, backend, toasts):
        backend.write = MagicMock(side_effect=OSError("read-only"))

        snippet = service.add_snippet(Snippet(title="kept"))

        assert service.get_all_snippets() == [snippet]
        assert service.visible_snippets == (snippet,)
        assert toasts.history == [Toast.SAVE_FAILED, Toast.SNIPPET_ADDED]

    def test_delete_moves_snippet_once(self, service, backend, toasts):
        snippet = service.add_snippet(Snippet(title="gone"))
        backend.write = MagicMock(side_effect=OSError("read-only"))
        toasts.history.clear()

        service.delete_snippet(snippet.id)

        assert service.get_all_snippets() == []
        assert service.store.deleted == [snippet]
        assert toasts.history == [Toast.SAVE_FAILED, Toast.SNIPPET_DELETED]

    def test_undo_after_failed_delete_keeps_ids_unique(self, service, backend, toasts):
        snippet = service.add_snippet(Snippet(title="back"))
        service.add_snippet(Snippet(title="other"))
        backend.write = MagicMock(side_effect=OSError("read-only"))

        service.delete_snippet(snippet.id)
        assert service.undo_delete() is True

        ids = [s.id for s in service.get_all_snippets()]
        assert ids.count(snippet.id) == 1
        assert len(ids) == 2
        assert service.store.deleted == []
        assert toasts.history[-2:] == [Toast.SAVE_FAILED, Toast.SNIPPET_RESTORED]


class TestSaving:
    """Tests for save_snippets() and autosave."""

    def test_save_success_toast(self, service: SnippetService, toasts: ToastService):
        service.save_snippets()
        assert toasts.history == [Toast.SAVE_SUCCEEDED]

    def test_save_failure_keeps_memory(self, toasts, hotkeys):
        backend = MemoryBackend()
        service = make_service(backend, toasts, hotkeys)
        service.add_snippet(Snippet(title="kept"))
        backend.persist = MagicMock(side_effect=OSError("read-only"))

        service.save_snippets()

        assert toasts.history[-1] is Toast.SAVE_FAILED
        assert len(service.get_all_snippets()) == 1

    def test_autosave_runs_until_closed(self, toasts, hotkeys):
        saved = threading.Event()
        toasts.subscribe(lambda toast: toast is Toast.SAVE_SUCCEEDED and saved.set())
        service = make_service(MemoryBackend(), toasts, hotkeys, save_interval=0.01)

        assert saved.wait(5)

        service.close()
        count = toasts.history.count(Toast.SAVE_SUCCEEDED)
        threading.Event().wait(0.05)
        assert toasts.history.count(Toast.SAVE_SUCCEEDED) == count

    def test_no_toasts_after_close(self, service, toasts, hotkeys):
        snippet = service.add_snippet(Snippet(title="a"))
        service.delete_snippet(snippet.id)
        service.close()
        toasts.history.clear()

        hotkeys.push(HotKey.UNDO)
        service.save_snippets()

        assert toasts.history == []
        assert service.store.deleted == [snippet]


class TestAutosaveTimer:
    """Tests for AutosaveTimer."""

    def test_cancel_is_idempotent(self):
        timer = AutosaveTimer(60, MagicMock())
        timer.start()
        assert timer.running

        timer.cancel()
        timer.cancel()

        assert not timer.running

    def test_cancel_before_start(self):
        callback = MagicMock()
        timer = AutosaveTimer(0.01, callback)
        timer.cancel()
        callback.assert_not_called()
