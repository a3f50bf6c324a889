"""Mapping of watcher errors onto HTTP responses."""

import logging

from fastapi import HTTPException, status

from clubwatch.core.errors import (
    NoMatchSelected,
    ParseIncomplete,
    RecognitionFailed,
    StoreFailure,
    WatcherError,
)

logger = logging.getLogger(__name__)


def to_http_exception(e: WatcherError) -> HTTPException:
    """Map watcher errors to HTTP errors. Messages are passed through verbatim."""
    logger.warning("[API] %s: %s", type(e).__name__, e)
    if isinstance(e, NoMatchSelected):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, ParseIncomplete):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "excerpt": e.excerpt, "missing": e.missing},
        )
    if isinstance(e, RecognitionFailed):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if isinstance(e, StoreFailure):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
