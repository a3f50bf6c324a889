"""API route modules."""

from clubwatch.api.routes import fixtures, watcher

__all__ = ["fixtures", "watcher"]
