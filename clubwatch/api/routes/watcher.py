"""Watcher API endpoints.

Manual stat entry, OCR/demo imports, reset, and the analysis views
(match verdict, season averages, performance correlation).
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.concurrency import run_in_threadpool

from clubwatch.api.dependencies import get_recognizer
from clubwatch.api.errors import to_http_exception
from clubwatch.api.models import (
    AnalysisResponse,
    DemoImportRequest,
    HalfGoalsModel,
    ImportResponse,
    MatchModel,
    MetricAggregateModel,
    ObservationResponse,
    ObservationSave,
    PerformancePointModel,
    SeasonResponse,
    TextImportRequest,
)
from clubwatch.core.errors import NoMatchSelected, WatcherError
from clubwatch.core.interfaces import TextRecognizer
from clubwatch.database import (
    SqliteObservationStore,
    get_all_matches,
    get_db,
    get_ocr_settings,
    get_played_matches,
)
from clubwatch.watcher.service import ImportResult, WatcherService

router = APIRouter()


def _service(recognizer: TextRecognizer | None = None) -> WatcherService:
    with get_db() as conn:
        ocr_settings = get_ocr_settings(conn)
    return WatcherService(SqliteObservationStore(), recognizer, ocr_settings)


def _import_response(result: ImportResult) -> ImportResponse:
    return ImportResponse(
        source=result.source,
        observation=ObservationResponse.model_validate(result.observation),
        unrecovered_fields=list(result.unrecovered_fields),
        missing_opposition=result.missing_opposition,
    )


# =============================================================================
# OBSERVATIONS
# =============================================================================


@router.get("/observations", response_model=list[ObservationResponse])
def list_observations():
    """List all stored observations."""
    try:
        return [ObservationResponse.model_validate(o) for o in _service().list_observations()]
    except WatcherError as e:
        raise to_http_exception(e) from None


@router.get("/observations/{match_id}", response_model=ObservationResponse)
def get_observation(match_id: str):
    """Get stats for a match (zeroed if none are stored yet)."""
    try:
        observation = _service().working_copy(match_id)
    except WatcherError as e:
        raise to_http_exception(e) from None
    return ObservationResponse.model_validate(observation)


@router.put("/observations/{match_id}", response_model=ObservationResponse)
def save_observation(match_id: str, body: ObservationSave):
    """Save manually entered stats (replaces any existing stats)."""
    try:
        observation = _service().save(match_id, body.us.to_pair(), body.opposition.to_pair())
    except WatcherError as e:
        raise to_http_exception(e) from None
    return ObservationResponse.model_validate(observation)


@router.delete("/observations/{match_id}", response_model=ObservationResponse)
def reset_observation(match_id: str):
    """Delete stored stats for a match and return a zeroed copy."""
    try:
        observation = _service().reset(match_id)
    except WatcherError as e:
        raise to_http_exception(e) from None
    return ObservationResponse.model_validate(observation)


# =============================================================================
# IMPORTS
# =============================================================================


@router.post("/import/text", response_model=ImportResponse)
def import_text(body: TextImportRequest):
    """Import stats from OCR text that was recognized elsewhere."""
    try:
        result = _service().import_text(body.match_id, body.text)
    except WatcherError as e:
        raise to_http_exception(e) from None
    return _import_response(result)


@router.post("/import/image", response_model=ImportResponse)
async def import_image(
    request: Request,
    match_id: str | None = Query(None, description="Match the screenshot belongs to"),
    recognizer: TextRecognizer = Depends(get_recognizer),
):
    """Import stats from a screenshot sent as the raw request body."""
    if not match_id:
        raise to_http_exception(NoMatchSelected())

    image = await request.body()
    if not image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image data")

    try:
        # Recognition blocks; keep it off the event loop
        result = await run_in_threadpool(_service(recognizer).import_image, match_id, image)
    except WatcherError as e:
        raise to_http_exception(e) from None
    return _import_response(result)


@router.post("/import/demo", response_model=ImportResponse)
def import_demo(body: DemoImportRequest):
    """Import the fixed demo dataset for a match."""
    try:
        result = _service().import_demo(body.match_id)
    except WatcherError as e:
        raise to_http_exception(e) from None
    return _import_response(result)


# =============================================================================
# ANALYSIS
# =============================================================================


@router.get("/matches", response_model=list[MatchModel])
def list_played_matches():
    """Matches with a result, newest first."""
    with get_db() as conn:
        return [MatchModel.model_validate(m) for m in get_played_matches(conn)]


@router.get("/matches/{match_id}/analysis", response_model=AnalysisResponse)
def match_analysis(match_id: str):
    """Dominance verdict and per-metric breakdown for one match."""
    try:
        analysis = _service().analyze(match_id)
    except WatcherError as e:
        raise to_http_exception(e) from None
    if analysis is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No stats recorded for this match"
        )
    return AnalysisResponse.model_validate(analysis)


@router.get("/season", response_model=SeasonResponse)
def season_summary():
    """Season totals, averages and clinicality over recorded games."""
    try:
        season = _service().season()
    except WatcherError as e:
        raise to_http_exception(e) from None
    return SeasonResponse(
        games=season.games,
        metrics=[MetricAggregateModel.model_validate(m) for m in season.metrics.values()],
        half_goals=HalfGoalsModel.model_validate(season.half_goals),
        us_clinicality=season.us_clinicality,
        opposition_clinicality=season.opposition_clinicality,
    )


@router.get("/performance", response_model=list[PerformancePointModel])
def performance():
    """Dominance margin vs goal difference for each observed, played match."""
    with get_db() as conn:
        matches = get_all_matches(conn)
    try:
        points = _service().performance(matches)
    except WatcherError as e:
        raise to_http_exception(e) from None
    return [PerformancePointModel.model_validate(p) for p in points]
