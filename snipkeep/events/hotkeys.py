"""Global hotkey signals.

Whatever listens for keyboard shortcuts pushes HotKey values here; the
snippet service pulls them for the lifetime of the engine.
"""

from collections.abc import Callable
from enum import Enum

from .subject import Subscription


class HotKey(str, Enum):
    """Discrete hotkey commands."""

    UNDO = "undo"


class HotKeyService:
    """Broadcasts hotkey events to pullers. Unlike toasts, nothing is replayed."""

    def __init__(self):
        self._observers: list[Callable[[HotKey], None]] = []

    def push(self, hotkey: HotKey) -> None:
        for observer in list(self._observers):
            observer(hotkey)

    def pull(self, observer: Callable[[HotKey], None]) -> Subscription:
        self._observers.append(observer)
        return Subscription(lambda: self._observers.remove(observer))
