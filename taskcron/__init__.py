"""A persistent shell-command scheduler with retries and backoff, stored in SQLite."""

__version__ = "0.1.0"
__all__ = ["models", "store", "runner", "importer", "cli"]