"""Data models package for cityvibes."""
from cityvibes.models.place import (
    Place,
    ScoredPlace,
)
from cityvibes.models.vibe import (
    MoodGroup,
    VibeTokens,
)
from cityvibes.models.translation import (
    Translation,
    TranslationSource,
    CacheEntry,
)
from cityvibes.models.foursquare import (
    FoursquarePlace,
    FoursquareSearchParams,
    FoursquareSearchResponse,
)
from cityvibes.models.ranking import (
    RankingStage,
    RankRequest,
    RankResponse,
    RankResult,
    RankTrace,
    PlaceScore,
    ExplainRequest,
    ExplainResponse,
    FeedbackRequest,
    FeedbackResponse,
)

__all__ = [
    # Place models
    "Place",
    "ScoredPlace",
    # Vibe models
    "MoodGroup",
    "VibeTokens",
    # Translation models
    "Translation",
    "TranslationSource",
    "CacheEntry",
    # Foursquare models
    "FoursquarePlace",
    "FoursquareSearchParams",
    "FoursquareSearchResponse",
    # Ranking models
    "RankingStage",
    "RankRequest",
    "RankResponse",
    "RankResult",
    "RankTrace",
    "PlaceScore",
    "ExplainRequest",
    "ExplainResponse",
    "FeedbackRequest",
    "FeedbackResponse",
]
