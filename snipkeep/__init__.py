"""snipkeep: a personal code snippet manager."""

__version__ = "0.1.0"
