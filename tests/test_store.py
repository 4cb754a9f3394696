"""Tests for the snippet store and its undo stack.

Uses an in-memory backend so write-through persistence can be inspected.
"""

from unittest.mock import MagicMock

import pytest

from snipkeep.snippets.models import Snippet
from snipkeep.snippets.store import SnippetNotFoundError, SnippetStore
from snipkeep.storage.backend import MemoryBackend
from snipkeep.storage.service import SNIPPET_KEY, StorageService


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> SnippetStore:
    """Create an empty store over an in-memory backend."""
    return SnippetStore(StorageService(backend))


def persisted_ids(backend: MemoryBackend) -> list[str]:
    return [record["id"] for record in backend.read(SNIPPET_KEY)]


class TestAdd:
    """Tests for add()."""

    def test_assigns_id_and_prepends(self, store: SnippetStore):
        first = store.add(Snippet(title="first"))
        second = store.add(Snippet(title="second"))

        assert first.id and second.id
        assert store.snippets == [second, first]

    def test_replaces_existing_id(self, store: SnippetStore):
        """Incoming ids are never trusted."""
        snippet = store.add(Snippet(id="mine", title="x"))
        assert snippet.id != "mine"

    def test_writes_through_to_storage(self, store: SnippetStore, backend: MemoryBackend):
        snippet = store.add(Snippet(title="saved"))
        assert persisted_ids(backend) == [snippet.id]

    def test_ids_are_unique(self, store: SnippetStore):
        """No two live snippets share an id."""
        for number in range(500):
            store.add(Snippet(title=str(number)))

        ids = [s.id for s in store.snippets]
        assert len(set(ids)) == len(ids)


class TestLoad:
    """Tests for loading an existing collection."""

    def test_loads_persisted_snippets(self):
        backend = MemoryBackend({SNIPPET_KEY: [{"id": "a", "title": "A", "code": "x"}]})
        store = SnippetStore(StorageService(backend))

        assert [s.id for s in store.snippets] == ["a"]
        assert store.deleted == []

    def test_records_without_id_get_one(self):
        """Stored records with no id are given distinct ids and written back."""
        backend = MemoryBackend({SNIPPET_KEY: [
            {"title": "a"},
            {"title": "b", "id": ""},
            {"title": "c", "id": "c"},
        ]})
        store = SnippetStore(StorageService(backend))

        ids = [s.id for s in store.snippets]
        assert all(ids)
        assert len(set(ids)) == 3
        assert ids[2] == "c"
        assert persisted_ids(backend) == ids

    def test_missing_key_is_empty(self, store: SnippetStore, backend: MemoryBackend):
        """A missing collection reads as empty and the default is stored."""
        assert store.snippets == []
        assert backend.read(SNIPPET_KEY) == []


class TestDeleteAndUndo:
    """Tests for delete() and undo()."""

    def test_delete_moves_to_deleted_stack(self, store: SnippetStore, backend: MemoryBackend):
        keep = store.add(Snippet(title="keep"))
        gone = store.add(Snippet(title="gone"))

        removed = store.delete(gone.id)

        assert removed == [gone]
        assert store.snippets == [keep]
        assert store.deleted == [gone]
        assert persisted_ids(backend) == [keep.id]

    def test_deleted_stack_is_most_recent_first(self, store: SnippetStore):
        a = store.add(Snippet(title="a"))
        b = store.add(Snippet(title="b"))

        store.delete(a.id)
        store.delete(b.id)

        assert store.deleted == [b, a]

    def test_delete_unknown_id_is_noop(self, store: SnippetStore):
        store.add(Snippet(title="a"))
        assert store.delete("missing") == []
        assert len(store.snippets) == 1

    def test_undo_restores_original_id(self, store: SnippetStore, backend: MemoryBackend):
        """delete then undo restores the same snippet with the same id."""
        snippet = store.add(Snippet(title="t", code="c", tags="x, y"))
        original_id = snippet.id

        store.delete(original_id)
        restored = store.undo()

        assert restored is snippet
        assert restored.id == original_id
        assert (restored.title, restored.code, restored.tags) == ("t", "c", "x, y")
        assert store.snippets == [snippet]
        assert store.deleted == []
        assert persisted_ids(backend) == [original_id]

    def test_failed_write_does_not_duplicate(self, store: SnippetStore, backend: MemoryBackend):
        """A failed write-through still moves the snippet exactly once."""
        snippet = store.add(Snippet(title="gone"))
        backend.write = MagicMock(side_effect=OSError("read-only"))
        on_rejected = MagicMock()

        store.delete(snippet.id, on_rejected)

        assert store.snippets == []
        assert store.deleted == [snippet]
        on_rejected.assert_called_once_with(False)

        assert store.undo(on_rejected) is snippet
        assert store.snippets == [snippet]
        assert store.deleted == []

    def test_undo_on_empty_stack(self, store: SnippetStore):
        """undo() with nothing deleted changes nothing."""
        store.add(Snippet(title="a"))
        before = list(store.snippets)

        assert store.undo() is None
        assert store.snippets == before
        assert store.deleted == []

    def test_new_ids_avoid_deleted_ones(self, store: SnippetStore):
        """A fresh id never collides with a snippet waiting on the undo stack."""
        gone = store.add(Snippet(title="gone"))
        store.delete(gone.id)

        for _ in range(50):
            assert store.create_id() != gone.id


class TestLookup:
    """Tests for by_id() and require()."""

    def test_by_id_finds_snippet(self, store: SnippetStore):
        snippet = store.add(Snippet(title="a"))
        assert store.by_id(snippet.id) is snippet

    def test_by_id_unknown_returns_none(self, store: SnippetStore):
        assert store.by_id("missing") is None

    def test_require_unknown_raises(self, store: SnippetStore):
        with pytest.raises(SnippetNotFoundError):
            store.require("missing")
