"""Notifications, hotkey signals and the replay-latest subject they build on."""

from .hotkeys import HotKey, HotKeyService
from .subject import BehaviorSubject, Subscription
from .toast import Toast, ToastService

__all__ = [
    "BehaviorSubject",
    "Subscription",
    "Toast",
    "ToastService",
    "HotKey",
    "HotKeyService",
]
