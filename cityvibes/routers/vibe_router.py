"""FastAPI routes for vibe ranking endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from cityvibes.errors import InputError
from cityvibes.models import (
    ExplainRequest,
    ExplainResponse,
    FeedbackRequest,
    FeedbackResponse,
    Place,
    RankRequest,
    RankResponse,
)

logger = logging.getLogger(__name__)

# Create router at module level
router = APIRouter()

# Global handler reference - set during startup
_vibe_handler = None


def set_vibe_handler(handler):
    """Set the vibe handler instance (called during startup)."""
    global _vibe_handler
    _vibe_handler = handler
    logger.info("[VibeRouter] Handler injected successfully")


def get_handler():
    """Get the vibe handler, raising error if not initialized."""
    if _vibe_handler is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return _vibe_handler


@router.post(
    "/v1/rank",
    response_model=RankResponse,
    response_model_exclude_none=True,
    summary="Rank places for a mood",
    description="Resolve a free-text mood into a search and return the top matching places in a city",
)
async def rank_places(request: RankRequest) -> RankResponse:
    """Rank places for a mood in a city."""
    try:
        handler = get_handler()
        return await handler.rank(request)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[VibeRouter] Error in rank_places: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/v1/places",
    response_model=list[Place],
    summary="Search places",
    description="Raw places search in a city, normalized but not ranked",
)
async def search_places(
    city: Optional[str] = Query(None, description="City name, e.g. Monterrey"),
    query: Optional[str] = Query(None, description="Free-text search terms"),
    limit: int = Query(20, description="Max results", ge=1, le=50),
) -> list[Place]:
    """Search places without ranking."""
    try:
        handler = get_handler()
        return await handler.search_places(city, query, limit)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[VibeRouter] Error in search_places: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/v1/explain",
    response_model=ExplainResponse,
    summary="Explain a recommendation",
    description="Short explanation, in the mood's tone, of why a place fits the mood",
)
async def explain_place(request: ExplainRequest) -> ExplainResponse:
    """Explain why a place fits a mood."""
    try:
        handler = get_handler()
        return await handler.explain(request)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[VibeRouter] Error in explain_place: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/v1/feedback",
    response_model=FeedbackResponse,
    summary="Send feedback",
    description="Like/skip feedback on a recommended place",
)
def send_feedback(request: FeedbackRequest) -> FeedbackResponse:
    """Record feedback on a recommended place."""
    try:
        handler = get_handler()
        return handler.feedback(request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[VibeRouter] Error in send_feedback: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/ping",
    summary="Health check",
    description="Health check endpoint",
)
def ping() -> dict[str, str]:
    """Health check endpoint."""
    handler = get_handler()
    return handler.ping()
