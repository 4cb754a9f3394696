"""Default display order for snippets.

The order is a cascade of comparators. Each one returns 0 on a tie and
hands over to the next:

1. showing snippets before hidden ones
2. lower index first
3. newer timestamp first
4. title ascending (case-sensitive, no normalization)

Sorting is stable, so exact ties keep their previous relative order.
"""

from functools import cmp_to_key

from .models import Snippet


def compare_showing(a: Snippet, b: Snippet) -> int:
    """Showing snippets come first."""
    return int(b.showing) - int(a.showing)


def compare_indices(a: Snippet, b: Snippet) -> int:
    """The lowest index comes first (index 1 before index 2)."""
    if a.index > b.index:
        return 1
    if b.index > a.index:
        return -1
    return 0


def compare_timestamps(a: Snippet, b: Snippet) -> int:
    """Newer snippets come first."""
    if a.timestamp < b.timestamp:
        return 1
    if b.timestamp < a.timestamp:
        return -1
    return 0


def compare_titles(a: Snippet, b: Snippet) -> int:
    """The alphabetically lowest title comes first ("a" before "b")."""
    if a.title > b.title:
        return 1
    if b.title > a.title:
        return -1
    return 0


CASCADE = (compare_showing, compare_indices, compare_timestamps, compare_titles)


def compare_snippets(a: Snippet, b: Snippet) -> int:
    """Run the comparator cascade until one stage breaks the tie."""
    for compare in CASCADE:
        result = compare(a, b)
        if result != 0:
            return result
    return 0


def sort_snippets(snippets: list[Snippet]) -> None:
    """Sort snippets in place into the default display order."""
    snippets.sort(key=cmp_to_key(compare_snippets))
