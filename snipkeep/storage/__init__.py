"""Persistence for snippets and the style object."""

from .backend import JsonFileBackend, KeyValueBackend, MemoryBackend
from .service import SNIPPET_KEY, STYLE_KEY, StorageService

__all__ = [
    "KeyValueBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "StorageService",
    "SNIPPET_KEY",
    "STYLE_KEY",
]
