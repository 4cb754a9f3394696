"""Style object editing.

The style object is an opaque JSON dict that the presentation layer
interprets. snipkeep only stores it, returns it, and can reset it.
"""

import copy

from snipkeep.storage.service import (
    PersistCallback,
    StorageService,
    log_persist_outcome,
)

DEFAULT_STYLE: dict = {
    "theme": "light",
    "font_family": "monospace",
    "font_size": 14,
    "card_width": 400,
}


class StyleService:
    """Load, replace and revert the persisted style object."""

    def __init__(self, storage: StorageService):
        self._storage = storage

    def get_style_object(self) -> dict:
        return self._storage.get_style_object(copy.deepcopy(DEFAULT_STYLE))

    def save_style_object(
        self,
        style: dict,
        on_success: PersistCallback = log_persist_outcome,
        on_rejected: PersistCallback = log_persist_outcome,
    ) -> None:
        self._storage.save_style_object(style, on_success, on_rejected)

    def revert(self) -> dict:
        """Store and return a copy of the default style."""
        style = copy.deepcopy(DEFAULT_STYLE)
        self._storage.save_style_object(style)
        return style
