"""Debug routes for inspecting the vibe pipeline."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from cityvibes.models import MoodGroup, Translation
from cityvibes.services.category_validator import get_available_vibes, get_vibe_from_tokens, get_vibe_reason
from cityvibes.services.query_builder import build_query
from cityvibes.services.vibe_tokenizer import tokenize

logger = logging.getLogger(__name__)

# Create router at module level
router = APIRouter(prefix="/debug", tags=["debug"])

# Global references - set during startup
_translator = None
_place_search = None
_foursquare_client = None


def set_debug_dependencies(translator, place_search=None, foursquare_client=None):
    """Set the dependencies for debug routes (called during startup)."""
    global _translator, _place_search, _foursquare_client
    _translator = translator
    _place_search = place_search
    _foursquare_client = foursquare_client
    logger.info("[DebugRouter] Dependencies injected")


class TokenizeResult(BaseModel):
    """How a mood phrase is read by the pipeline, without any upstream call."""
    mood: str
    tokens: list[str]
    mood_group: Optional[MoodGroup] = None
    primary_vibe: str
    vibe_reason: str
    query: str


class VibeInfo(BaseModel):
    vibe: str
    reason: str


class FoursquareStatus(BaseModel):
    configured: bool
    connected: bool
    message: str


@router.get(
    "/tokenize",
    response_model=TokenizeResult,
    summary="Tokenize a mood",
    description="Show tokens, mood group, primary vibe and the token-built query for a mood",
)
def debug_tokenize(
    mood: str = Query(..., description="Mood phrase, e.g. 'bellakeo'"),
) -> TokenizeResult:
    vibe_tokens = tokenize(mood)
    primary_vibe = get_vibe_from_tokens(vibe_tokens.tokens)
    return TokenizeResult(
        mood=mood,
        tokens=vibe_tokens.tokens,
        mood_group=vibe_tokens.mood_group,
        primary_vibe=primary_vibe,
        vibe_reason=get_vibe_reason(primary_vibe),
        query=build_query(vibe_tokens.tokens),
    )


@router.get(
    "/translate",
    response_model=Translation,
    summary="Translate a mood",
    description="Run the semantic translator (cache, dictionary, LLM, fallback) on a phrase",
)
async def debug_translate(
    phrase: str = Query(..., description="Mood phrase to translate"),
) -> Translation:
    if _translator is None:
        raise HTTPException(status_code=503, detail="Translator not initialized")
    return await _translator.translate(phrase)


@router.get(
    "/vibes",
    response_model=list[VibeInfo],
    summary="List primary vibes",
)
def debug_vibes() -> list[VibeInfo]:
    return [VibeInfo(vibe=vibe, reason=get_vibe_reason(vibe)) for vibe in get_available_vibes()]


@router.get(
    "/cache",
    summary="Cache statistics",
    description="Size, hit/miss counters and keys of the translation and places caches",
)
def debug_cache_stats() -> dict:
    if _translator is None:
        raise HTTPException(status_code=503, detail="Translator not initialized")
    return {
        "translation": _translator.cache_stats(),
        "places": _place_search.cache_stats() if _place_search is not None else None,
    }


@router.post(
    "/cache/purge",
    summary="Purge expired cache entries",
)
def debug_cache_purge() -> dict[str, int]:
    if _translator is None:
        raise HTTPException(status_code=503, detail="Translator not initialized")
    return {
        "translation": _translator.purge_expired(),
        "places": _place_search.purge_expired() if _place_search is not None else 0,
    }


@router.get(
    "/foursquare/status",
    response_model=FoursquareStatus,
    summary="Foursquare connection status",
    description="Check that the Foursquare key is configured and a test search succeeds",
)
async def debug_foursquare_status() -> FoursquareStatus:
    if _foursquare_client is None or not _foursquare_client.is_available():
        return FoursquareStatus(configured=False, connected=False, message="Foursquare API key not configured")

    connected = await _foursquare_client.test_connection()
    return FoursquareStatus(
        configured=True,
        connected=connected,
        message="Foursquare API reachable" if connected else "Foursquare API test search failed",
    )
