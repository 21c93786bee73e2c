"""Request/response models for ranking, explanations and feedback."""
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from cityvibes.models.place import Place
from cityvibes.models.translation import Translation
from cityvibes.models.vibe import MoodGroup


class RankingStage(str, Enum):
    """Pipeline stages of a ranking request, in order."""
    RECEIVED_INPUT = "received_input"
    TOKENIZED = "tokenized"
    QUERY_BUILT = "query_built"
    CANDIDATES_FETCHED = "candidates_fetched"
    VALIDATED = "validated"
    SCORED = "scored"
    FINALIZED = "finalized"
    FAILED = "failed"


class PlaceScore(BaseModel):
    name: str
    category: str
    relevance: float
    backfilled: bool = False


class RankTrace(BaseModel):
    """Diagnostic record of one ranking run (returned only in debug mode)."""
    stage: RankingStage = RankingStage.RECEIVED_INPUT
    tokens: list[str] = Field(default_factory=list)
    mood_group: Optional[MoodGroup] = None
    primary_vibe: Optional[str] = None
    query: Optional[str] = None
    category_filter: Optional[list[str]] = None
    translation: Optional[Translation] = None
    candidates_fetched: int = 0
    candidates_validated: int = 0
    validation_fallback: bool = False
    scores: list[PlaceScore] = Field(default_factory=list)
    upstream_error: Optional[str] = None


class RankResult(BaseModel):
    """Output of the ranking pipeline."""
    places: list[Place] = Field(default_factory=list)
    message: Optional[str] = None
    fallback: bool = False
    trace: RankTrace = Field(default_factory=RankTrace)

    @property
    def total(self) -> int:
        return len(self.places)


class RankRequest(BaseModel):
    """Body of POST /v1/rank.

    mood accepts a string or a list of mood words (joined with spaces).
    """
    mood: str = ""
    city: str = ""
    debug: bool = False

    @field_validator("mood", mode="before")
    @classmethod
    def join_mood_list(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, list):
            return " ".join(str(item) for item in v if item is not None)
        return v


class RankResponse(BaseModel):
    places: list[Place]
    total: int
    explanation: Optional[str] = None
    message: Optional[str] = None
    fallback: bool = False
    debug: Optional[RankTrace] = None


class ExplainRequest(BaseModel):
    mood: str
    place: Place


class ExplainResponse(BaseModel):
    explanation: str


class FeedbackRequest(BaseModel):
    mood: str
    place_name: str
    feedback: Literal["like", "skip"]

    @field_validator("feedback", mode="before")
    @classmethod
    def convert_emoji(cls, v: Any) -> Any:
        """The swipe UI sends 🔥 for like and ❌ for skip."""
        if v == "🔥":
            return "like"
        if v == "❌":
            return "skip"
        return v


class FeedbackResponse(BaseModel):
    success: bool = True
    message: str = "Feedback received"
