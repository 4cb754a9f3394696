"""CLI commands module."""

from . import add, config, delete, list, pin, search, show, style, transfer

__all__ = [
    "add",
    "list",
    "show",
    "search",
    "delete",
    "pin",
    "transfer",
    "config",
    "style",
]
