"""Periodic background save.

The timer owns a daemon thread that calls the save callback every
`interval` seconds until cancel() is called.
"""

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class AutosaveTimer:
    """Cancelable repeating timer.

    Example:
        timer = AutosaveTimer(200, service.save_snippets)
        timer.start()
        ...
        timer.cancel()  # no further saves after this returns
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        self._interval = interval
        self._callback = callback
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="snipkeep-autosave", daemon=True
        )
        self._thread.start()
        logger.debug("Autosave every %ss", self._interval)

    def cancel(self) -> None:
        """Stop the timer and wait for an in-flight save to finish."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            logger.debug("Autosave tick")
            self._callback()
