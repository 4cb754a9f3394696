"""Derived views over the snippet collection.

Two views are published as immutable tuples:

- visible: the first page of the collection, restricted to showing snippets
- pinned: every pinned snippet in collection order, never paginated

Subscribers receive the current tuple on subscribe and a new tuple on
every change.
"""

from collections.abc import Callable, Sequence

from snipkeep.events.subject import BehaviorSubject, Subscription
from snipkeep.snippets.models import Snippet

DEFAULT_PAGE_SIZE = 12

SnippetView = tuple[Snippet, ...]


class ViewMaterializer:
    """Computes and publishes the visible and pinned views."""

    def __init__(
        self, snippets: Sequence[Snippet], page_size: int = DEFAULT_PAGE_SIZE
    ):
        """Build both views from the initial collection.

        Args:
            snippets: Collection in display order.
            page_size: Number of snippets on the first page.
        """
        self.page_size = page_size
        self._visible: BehaviorSubject[SnippetView] = BehaviorSubject(
            self.slice(snippets)
        )
        self._pinned: BehaviorSubject[SnippetView] = BehaviorSubject(
            self.determine_pinned(snippets)
        )

    @property
    def visible(self) -> SnippetView:
        return self._visible.value

    @property
    def pinned(self) -> SnippetView:
        return self._pinned.value

    def subscribe_visible(
        self, observer: Callable[[SnippetView], None]
    ) -> Subscription:
        return self._visible.subscribe(observer)

    def subscribe_pinned(
        self, observer: Callable[[SnippetView], None]
    ) -> Subscription:
        return self._pinned.subscribe(observer)

    def slice(self, snippets: Sequence[Snippet]) -> SnippetView:
        """First page of the collection, keeping only showing snippets."""
        return tuple(s for s in snippets[: self.page_size] if s.showing)

    def determine_pinned(self, snippets: Sequence[Snippet]) -> SnippetView:
        return tuple(s for s in snippets if s.pinned)

    def refresh_visible(self, snippets: Sequence[Snippet]) -> None:
        """Re-slice the first page from the collection."""
        self._visible.next(self.slice(snippets))

    def prepend_visible(self, snippet: Snippet) -> None:
        """Put a newly inserted snippet in front of the current page."""
        self._visible.next((snippet,) + self._visible.value)

    def refresh_pinned(self, snippets: Sequence[Snippet]) -> None:
        self._pinned.next(self.determine_pinned(snippets))

    def load_remaining(self, snippets: Sequence[Snippet]) -> None:
        """Show the whole collection, ignoring the page size and showing flags."""
        self._visible.next(tuple(snippets))

    def has_more(self, snippets: Sequence[Snippet], threshold: int) -> bool:
        """Whether more snippets are showing than threshold."""
        return sum(1 for s in snippets if s.showing) > threshold

    def promote(self, snippet: Snippet) -> None:
        """Move a snippet to the front of the visible view and mark it showing."""
        snippet.showing = True
        rest = tuple(s for s in self._visible.value if s.id != snippet.id)
        self._visible.next((snippet,) + rest)
