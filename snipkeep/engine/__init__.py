"""The snippet engine: views, autosave and the mutation protocol."""

from .autosave import AutosaveTimer
from .service import DEFAULT_SAVE_INTERVAL, SnippetService
from .views import DEFAULT_PAGE_SIZE, ViewMaterializer

__all__ = [
    "SnippetService",
    "ViewMaterializer",
    "AutosaveTimer",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SAVE_INTERVAL",
]
