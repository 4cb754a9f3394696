"""Wiring of the snippet engine for one CLI invocation.

Each command opens a session, performs its operation and exits. Autosave
is disabled: mutations write through to storage, and commands that only
change in-memory state call save_snippets() themselves.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import typer

from snipkeep.config import get_data_file, get_page_size, load_config
from snipkeep.engine.service import SnippetService
from snipkeep.events.hotkeys import HotKeyService
from snipkeep.events.toast import Toast, ToastService
from snipkeep.storage.backend import JsonFileBackend
from snipkeep.storage.service import StorageService


def open_storage() -> StorageService:
    """Storage backed by the configured data file."""
    config = load_config()
    return StorageService(JsonFileBackend(get_data_file(config)))


def open_toasts() -> ToastService:
    """Toast sink that echoes every notification to stderr."""
    toasts = ToastService()
    toasts.subscribe(_echo_toast)
    return toasts


@contextmanager
def open_service() -> Iterator[SnippetService]:
    """Build a SnippetService whose toasts are echoed to stderr.

    Example:
        with open_service() as service:
            service.delete_snippet(snippet_id)
    """
    config = load_config()

    service = SnippetService(
        StorageService(JsonFileBackend(get_data_file(config))),
        open_toasts(),
        HotKeyService(),
        page_size=get_page_size(config),
        save_interval=None,
    )
    try:
        yield service
    finally:
        service.close()


def _echo_toast(toast: Toast) -> None:
    if toast is not Toast.EMPTY:
        typer.echo(toast.value, err=True)
