"""Command-line interface for snipkeep."""
