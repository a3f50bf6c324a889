"""Fixture importer API endpoints.

Parsing never writes; the operator reviews and corrects the candidates,
then sends them back to /commit.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool

from clubwatch.api.dependencies import get_recognizer
from clubwatch.api.errors import to_http_exception
from clubwatch.api.models import (
    FixtureCommitRequest,
    FixtureCommitResponse,
    FixtureModel,
    FixtureParseRequest,
    FixtureParseResponse,
)
from clubwatch.core.errors import WatcherError
from clubwatch.core.interfaces import TextRecognizer
from clubwatch.core.types import FixtureCandidate
from clubwatch.database import get_all_settings, get_db
from clubwatch.fixtures import FixtureParser, commit_fixtures

logger = logging.getLogger(__name__)

router = APIRouter()


def _parser() -> FixtureParser:
    with get_db() as conn:
        settings = get_all_settings(conn)
    return FixtureParser(
        settings.club.name,
        short_name=settings.club.short_name,
        match_threshold=settings.fixtures.match_threshold,
        default_kickoff=settings.fixtures.default_kickoff,
        default_competition=settings.fixtures.default_competition,
    )


def _parse_response(raw_text: str, candidates: list[FixtureCandidate]) -> FixtureParseResponse:
    fixtures = [FixtureModel.model_validate(c) for c in candidates]
    return FixtureParseResponse(raw_text=raw_text, fixtures=fixtures, total=len(fixtures))


@router.post("/parse/text", response_model=FixtureParseResponse)
def parse_fixture_text(body: FixtureParseRequest):
    """Extract fixture candidates from pasted text."""
    return _parse_response(body.text, _parser().parse_text(body.text))


@router.post("/parse/image", response_model=FixtureParseResponse)
async def parse_fixture_image(
    request: Request,
    recognizer: TextRecognizer = Depends(get_recognizer),
):
    """Extract fixture candidates from a screenshot sent as the raw request body."""
    image = await request.body()
    if not image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image data")

    try:
        raw_text, candidates = await run_in_threadpool(_parser().parse_image, recognizer, image)
    except WatcherError as e:
        raise to_http_exception(e) from None
    return _parse_response(raw_text, candidates)


@router.post("/commit", response_model=FixtureCommitResponse)
def commit(body: FixtureCommitRequest):
    """Insert reviewed fixtures as matches."""
    if not body.fixtures:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fixtures to import")

    fixtures = [FixtureCandidate(**f.model_dump()) for f in body.fixtures]
    with get_db() as conn:
        match_ids = commit_fixtures(conn, fixtures)

    logger.info("[FIXTURES_API] Imported %d fixtures", len(match_ids))
    return FixtureCommitResponse(imported=len(match_ids), match_ids=match_ids)
