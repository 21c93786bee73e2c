"""Place data models using Pydantic."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Place(BaseModel):
    """Normalized venue returned to clients.

    Built once from a Foursquare result and never mutated afterwards.
    """

    name: str
    category: str = "general"  # Single canonical lower-case label
    city: str = ""
    address: str = ""
    lat: float = 0.0
    lng: float = 0.0
    phone: Optional[str] = None
    website: Optional[str] = None
    rating: str = "0"  # 0-5 decimal string, e.g. "4.3"
    price_level: str = "$"  # "$" .. "$$$$"
    opening_hours: str = "Hours not available"
    tags: list[str] = Field(default_factory=list)
    review_snippets: list[str] = Field(default_factory=list)
    last_checked: str = ""  # ISO date, e.g. "2026-10-16"
    media: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            return "general"
        return str(v).strip().lower()

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> list[str]:
        """Lower-case and de-duplicate tags, keeping first-seen order."""
        if v is None:
            return []
        tags: list[str] = []
        for tag in v:
            lowered = str(tag).strip().lower()
            if lowered and lowered not in tags:
                tags.append(lowered)
        return tags

    @field_validator("rating", mode="before")
    @classmethod
    def convert_rating_to_string(cls, v: Any) -> str:
        """Foursquare returns ratings as numbers; keep them as strings."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return "0"
        return str(v)

    @property
    def rating_value(self) -> float:
        """Numeric rating, 0.0 when the rating string is not a number."""
        try:
            return float(self.rating)
        except (TypeError, ValueError):
            return 0.0


class ScoredPlace(BaseModel):
    """A Place with its relevance for one ranking request. Internal only."""
    place: Place
    relevance: float = 0.0
    backfilled: bool = False
