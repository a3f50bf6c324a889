"""Watcher error taxonomy.

All of these are recoverable by the operator. A failed parse or import
never touches persisted state.
"""


class WatcherError(Exception):
    """Base class for watcher errors."""


class NoMatchSelected(WatcherError):
    """An import was attempted without a target match."""

    def __init__(self, message: str = "Please select a match first."):
        super().__init__(message)


class ParseIncomplete(WatcherError):
    """Required "us" rows could not be recovered from OCR text.

    Attributes:
        excerpt: Leading slice of the raw text, shown to the operator
        missing: Which rows were not found (e.g. ['first_half_us'])
    """

    def __init__(self, excerpt: str, missing: list[str]):
        self.excerpt = excerpt
        self.missing = missing
        super().__init__(
            "Could not detect all stats rows. "
            'Ensure the screenshot includes "1st Half" and "2nd Half" headers. '
            f"Raw text found: {excerpt}..."
        )


class StoreFailure(WatcherError):
    """The observation store rejected a read or write. Not retried."""


class RecognitionFailed(WatcherError):
    """The screenshot could not be read (bad image data or OCR engine error)."""
