"""Replay-latest publish/subscribe.

A BehaviorSubject always holds a current value. Subscribers are called
with that value as soon as they subscribe, then with every new value.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Subscription:
    """Handle returned by subscribe(); call unsubscribe() to stop."""

    def __init__(self, unsubscribe: Callable[[], None]):
        self._unsubscribe = unsubscribe
        self.closed = False

    def unsubscribe(self) -> None:
        if not self.closed:
            self.closed = True
            self._unsubscribe()


class BehaviorSubject(Generic[T]):
    """Holds a value and broadcasts every change to its observers.

    Example:
        subject = BehaviorSubject(())
        sub = subject.subscribe(print)  # prints () immediately
        subject.next((snippet,))        # prints (snippet,)
        sub.unsubscribe()

    Args:
        initial: Current value before anything is published.
        distinct: Skip publishing values equal to the current one.
    """

    def __init__(self, initial: T, *, distinct: bool = False):
        self._value = initial
        self._distinct = distinct
        self._observers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def next(self, value: T) -> None:
        if self._distinct and value == self._value:
            return
        self._value = value
        for observer in list(self._observers):
            observer(value)

    def subscribe(self, observer: Callable[[T], None]) -> Subscription:
        self._observers.append(observer)
        observer(self._value)
        return Subscription(lambda: self._observers.remove(observer))
