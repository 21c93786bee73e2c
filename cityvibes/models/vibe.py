"""Vibe token models."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class MoodGroup(str, Enum):
    """Coarse mood category detected from the raw input."""
    NIGHTLIFE = "nightlife"
    ROMANTIC = "romantic"
    CHILL = "chill"
    PRODUCTIVE = "productive"
    FOOD = "food"
    CULTURE = "culture"
    OUTDOOR = "outdoor"
    MELANCHOLIC = "melancholic"
    SOCIAL = "social"


class VibeTokens(BaseModel):
    """Ordered, de-duplicated, lower-case tokens derived from a mood phrase.

    mood_group is None when no group keyword was found in the input.
    """
    tokens: list[str] = Field(default_factory=list)
    mood_group: Optional[MoodGroup] = None

    @field_validator("tokens", mode="before")
    @classmethod
    def normalize_tokens(cls, v):
        if v is None:
            return []
        seen: list[str] = []
        for token in v:
            lowered = str(token).strip().lower()
            if lowered and lowered not in seen:
                seen.append(lowered)
        return seen

    def __len__(self) -> int:
        return len(self.tokens)

    def __contains__(self, token: str) -> bool:
        return token in self.tokens
