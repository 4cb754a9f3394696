"""Data models for snippet search."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SearchParameters:
    """A search request.

    Equality is structural, so republishing identical parameters can be
    detected and skipped.
    """

    query: str = ""  # Comma-separated terms, e.g. "regex, parse"
    title: bool = True
    tags: bool = True
    code: bool = True
    notes: bool = True


@dataclass
class SearchOutcome:
    """Result of scoring and reordering a collection."""

    terms: list[str] = field(default_factory=list)
    scores: dict[str, int] = field(default_factory=dict)  # snippet id -> score
    matched: int = 0  # Snippets left showing

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "terms": self.terms,
            "scores": self.scores,
            "matched": self.matched,
        }
