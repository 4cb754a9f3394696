"""Snippet records, their default ordering, and the backing store."""

from .models import Snippet, Supplement
from .ordering import compare_snippets, sort_snippets
from .store import SnippetNotFoundError, SnippetStore

__all__ = [
    "Snippet",
    "Supplement",
    "SnippetStore",
    "SnippetNotFoundError",
    "compare_snippets",
    "sort_snippets",
]
