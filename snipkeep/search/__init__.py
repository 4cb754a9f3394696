"""Term-based relevance search over the snippet collection."""

from .engine import score_snippets, search_snippets, tokenize_query
from .models import SearchOutcome, SearchParameters

__all__ = [
    "SearchParameters",
    "SearchOutcome",
    "search_snippets",
    "score_snippets",
    "tokenize_query",
]
