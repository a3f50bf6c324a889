"""HTTP adapter over the watcher and fixture importer."""

from clubwatch.api.app import create_app

__all__ = ["create_app"]
