"""Data models for stored snippets."""

import time
from dataclasses import dataclass, field


def now_millis() -> int:
    """Current time as integer epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class Supplement:
    """An additional code block attached to a snippet.

    Supplements take part in code and notes searches alongside the
    snippet's main code and notes.
    """

    code: str = ""
    notes: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"code": self.code, "notes": self.notes}

    @classmethod
    def from_dict(cls, data: dict) -> "Supplement":
        return cls(code=data.get("code", ""), notes=data.get("notes", ""))


@dataclass
class Snippet:
    """A user-authored code snippet with its metadata.

    `showing` is transient: it reflects whether the snippet matched the
    most recent search and is recomputed by every search.
    """

    title: str = ""
    code: str = ""
    notes: str = ""
    tags: str = ""  # Comma-separated, e.g. "python, regex"
    index: int = 0  # User-assigned ordering hint, lower sorts first
    timestamp: int = field(default_factory=now_millis)  # Epoch milliseconds
    pinned: bool = False
    showing: bool = True
    supplements: list[Supplement] = field(default_factory=list)
    id: str | None = None  # Assigned by the store on insertion

    def tag_list(self) -> list[str]:
        """Split the comma-separated tags into trimmed terms."""
        return [tag.strip() for tag in self.tags.split(",")]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "code": self.code,
            "notes": self.notes,
            "tags": self.tags,
            "index": self.index,
            "timestamp": self.timestamp,
            "pinned": self.pinned,
            "showing": self.showing,
            "supplements": [s.to_dict() for s in self.supplements],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Snippet":
        """Build a snippet from a persisted or imported record.

        Missing optional fields take their defaults; unknown keys are ignored.
        """
        timestamp = data.get("timestamp")
        return cls(
            id=data.get("id"),
            title=data.get("title", ""),
            code=data.get("code", ""),
            notes=data.get("notes", ""),
            tags=data.get("tags", ""),
            index=data.get("index", 0),
            timestamp=now_millis() if timestamp is None else timestamp,
            pinned=bool(data.get("pinned", False)),
            showing=bool(data.get("showing", True)),
            supplements=[
                Supplement.from_dict(s) for s in data.get("supplements", [])
            ],
        )
