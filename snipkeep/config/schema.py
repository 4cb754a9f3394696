"""Configuration schema definitions.

Uses TypedDict for type safety without runtime overhead.
These types match the structure of config.toml.
"""

from typing import TypedDict


class DefaultsConfig(TypedDict, total=False):
    """Default settings applied to the snippet engine.

    Attributes:
        page_size: Number of snippets in the first visible page.
    """

    page_size: int


class StorageConfig(TypedDict, total=False):
    """Where snippets are persisted.

    Attributes:
        data_file: Path of the JSON document holding snippets and style.
    """

    data_file: str


class SnipkeepConfig(TypedDict, total=False):
    """Root configuration structure.

    Attributes:
        defaults: Engine defaults.
        storage: Persistence settings.
    """

    defaults: DefaultsConfig
    storage: StorageConfig
