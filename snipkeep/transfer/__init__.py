"""Import and export of snippet files.

Import payloads are validated here, before they reach the snippet
service: the service assumes well-formed input.

A payload is a JSON file holding either one snippet record or a list of
them. Each record must be an object with string "title" and "code"
fields; every other field is optional.

Usage:
    from snipkeep.transfer import load_import_payload, export_snippets

    snippets = load_import_payload(Path("backup.json"))
    export_snippets(service.get_all_snippets(), Path("backup.json"))
"""

import json
from collections.abc import Sequence
from pathlib import Path

from snipkeep.snippets.models import Snippet

__all__ = [
    "MAX_IMPORT_BYTES",
    "TransferError",
    "ImportTooBigError",
    "ImportPayloadError",
    "load_import_payload",
    "parse_import_payload",
    "export_snippets",
]

# Files larger than this are rejected without being parsed
MAX_IMPORT_BYTES = 5 * 1024 * 1024


class TransferError(Exception):
    """Error importing or exporting snippets."""

    pass


class ImportTooBigError(TransferError):
    """Import file exceeds MAX_IMPORT_BYTES."""

    pass


class ImportPayloadError(TransferError):
    """Import file is not valid JSON or not snippet-shaped."""

    pass


def load_import_payload(path: Path) -> list[Snippet]:
    """Read and validate an import file.

    Args:
        path: JSON file to import.

    Returns:
        Snippets in file order (ids are reassigned on import).

    Raises:
        ImportTooBigError: If the file exceeds MAX_IMPORT_BYTES.
        ImportPayloadError: If the file is unreadable or malformed.
    """
    try:
        size = path.stat().st_size
    except OSError as e:
        raise ImportPayloadError(f"Cannot read {path}: {e}")

    if size > MAX_IMPORT_BYTES:
        raise ImportTooBigError(
            f"{path} is {size} bytes (limit {MAX_IMPORT_BYTES})"
        )

    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ImportPayloadError(f"Cannot read {path}: {e}")

    return parse_import_payload(text)


def parse_import_payload(text: str) -> list[Snippet]:
    """Validate JSON text holding one snippet record or a list of them.

    Raises:
        ImportPayloadError: If the text is not valid JSON or a record is
                            missing a string title or code.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportPayloadError(f"Invalid JSON: {e}")

    records = data if isinstance(data, list) else [data]

    snippets = []
    for position, record in enumerate(records):
        _validate_record(record, position)
        snippets.append(Snippet.from_dict(record))

    return snippets


def _validate_record(record: object, position: int) -> None:
    if not isinstance(record, dict):
        raise ImportPayloadError(f"Record {position} is not an object")

    for key in ("title", "code"):
        if not isinstance(record.get(key), str):
            raise ImportPayloadError(f"Record {position} has no string '{key}'")

    for key in ("notes", "tags"):
        if key in record and not isinstance(record[key], str):
            raise ImportPayloadError(f"Record {position} has a non-string '{key}'")

    for key in ("index", "timestamp"):
        value = record.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ImportPayloadError(f"Record {position} has a non-integer '{key}'")

    supplements = record.get("supplements", [])
    if not isinstance(supplements, list) or not all(
        isinstance(s, dict) for s in supplements
    ):
        raise ImportPayloadError(f"Record {position} has malformed 'supplements'")


def export_snippets(snippets: Sequence[Snippet], path: Path) -> int:
    """Write snippets to a JSON file that load_import_payload accepts.

    Returns:
        Number of snippets written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([s.to_dict() for s in snippets], indent=2))
    return len(snippets)
