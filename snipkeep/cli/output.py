"""Output formatting shared by the list and search commands."""

import json
from collections.abc import Mapping, Sequence

import typer

from snipkeep.snippets.models import Snippet

OUTPUT_FORMATS = ("summary", "json", "ids")


def echo_snippets(
    snippets: Sequence[Snippet],
    format: str = "summary",
    scores: Mapping[str, int] | None = None,
) -> None:
    """Print snippets in one of OUTPUT_FORMATS.

    Args:
        snippets: Snippets in display order.
        format: "summary" (one line each), "json" or "ids".
        scores: Optional search scores, shown in summary output.
    """
    if format == "json":
        typer.echo(json.dumps([s.to_dict() for s in snippets], indent=2))
        return

    for snippet in snippets:
        if format == "ids":
            typer.echo(snippet.id)
        else:
            typer.echo(format_summary(snippet, scores))


def format_summary(snippet: Snippet, scores: Mapping[str, int] | None = None) -> str:
    """One-line summary: id, pin marker, title, tags and optional score."""
    marker = "*" if snippet.pinned else " "
    line = f"{snippet.id} {marker} {snippet.title}"
    if snippet.tags.strip():
        line += f"  [{snippet.tags}]"
    if scores is not None:
        line += f"  (score {scores.get(snippet.id, 0)})"
    return line


def check_format(format: str) -> None:
    """Exit with an error for an unknown output format."""
    if format not in OUTPUT_FORMATS:
        typer.echo(
            f"Unknown format '{format}'. Use one of: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(1)
