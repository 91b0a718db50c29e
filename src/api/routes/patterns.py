"""
Pattern endpoints - list patterns, read and switch the active one
"""

from fastapi import APIRouter, Depends
from api.schemas.pattern import (
    ActivePatternRequest,
    ActivePatternResponse,
    MetricsResponse,
    PatternListResponse,
    PatternResponse,
)
from api.dependencies import get_engine
from api.middleware.error_handler import PatternNotFoundError
from engine.pattern_engine import PatternEngine
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(tags=["Patterns"])


@router.get(
    "/patterns",
    response_model=PatternListResponse,
    summary="List all patterns",
    description="Get all selectable patterns in presentation order"
)
async def list_patterns(engine: PatternEngine = Depends(get_engine)) -> PatternListResponse:
    patterns = [
        PatternResponse(id=info.id, friendly_name=info.friendly_name)
        for info in engine.list_patterns()
    ]
    return PatternListResponse(patterns=patterns, count=len(patterns))


@router.get(
    "/patterns/{pattern_id}",
    response_model=PatternResponse,
    summary="Get pattern details"
)
async def get_pattern(
    pattern_id: str,
    engine: PatternEngine = Depends(get_engine)
) -> PatternResponse:
    """
    **Errors:**
    - 404: Pattern not found (unlike activation, lookups do not fall back)
    """
    for info in engine.list_patterns():
        if info.id == pattern_id:
            return PatternResponse(id=info.id, friendly_name=info.friendly_name)
    raise PatternNotFoundError(pattern_id)


@router.get(
    "/activePattern",
    response_model=ActivePatternResponse,
    summary="Get active pattern"
)
async def get_active_pattern(engine: PatternEngine = Depends(get_engine)) -> ActivePatternResponse:
    return ActivePatternResponse(active_pattern=engine.get_active_pattern())


@router.post(
    "/activePattern",
    response_model=ActivePatternResponse,
    summary="Switch active pattern",
    description="Activate a pattern. Unknown IDs fall back to the default pattern."
)
async def set_active_pattern(
    request: ActivePatternRequest,
    engine: PatternEngine = Depends(get_engine)
) -> ActivePatternResponse:
    """
    **Returns:** the ID that is actually active afterwards. Compare it with
    the requested ID to detect a fallback.
    """
    active = engine.load(request.active_pattern)
    log.info("Pattern switched via API", requested=request.active_pattern, active=active)
    return ActivePatternResponse(active_pattern=active)


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Render metrics"
)
async def get_metrics(engine: PatternEngine = Depends(get_engine)) -> MetricsResponse:
    return MetricsResponse(engine=engine.get_metrics())
