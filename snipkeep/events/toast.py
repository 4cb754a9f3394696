"""User-facing notifications.

Toasts are fire-and-forget: the engine pushes one and never looks at
what the sink does with it.
"""

import logging
from collections.abc import Callable
from enum import Enum

from .subject import BehaviorSubject, Subscription

logger = logging.getLogger(__name__)


class Toast(str, Enum):
    """Named notifications; values are the text shown to the user."""

    COPY_FAILED = "Copy Failed"
    COPY_SUCCEEDED = "Copy Succeeded"
    SAVE_SUCCEEDED = "Save Succeeded"
    SAVING = "Saving..."
    SAVE_FAILED = "Save Failed"
    IMPORT_SUCCEEDED = "Import Succeeded"
    IMPORT_FAILED = "Import Failed"
    IMPORT_TOO_BIG = "File Too Big!"
    SNIPPET_ADDED = "Snippet Added"
    SNIPPET_DELETED = "Snippet Deleted"
    SNIPPET_RESTORED = "Snippet Restored"
    SEARCH_COMPLETED = "Search Completed"
    WELCOME = "Welcome"
    EMPTY = ""


class ToastService:
    """Notification sink that broadcasts toasts and keeps a history.

    Late subscribers get the most recent toast (EMPTY before any push).
    """

    def __init__(self):
        self._subject: BehaviorSubject[Toast] = BehaviorSubject(Toast.EMPTY)
        self.history: list[Toast] = []

    def push(self, toast: Toast) -> None:
        logger.info("Toast: %s", toast.name)
        self.history.append(toast)
        self._subject.next(toast)

    def subscribe(self, observer: Callable[[Toast], None]) -> Subscription:
        return self._subject.subscribe(observer)
