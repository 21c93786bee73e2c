"""Semantic translation and cache entry models."""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class TranslationSource(str, Enum):
    DICTIONARY = "dictionary"
    LLM = "llm"
    FALLBACK = "fallback"


class Translation(BaseModel):
    """Result of translating a mood phrase into a Foursquare search query."""
    original_phrase: str
    translated_query: str
    categories: Optional[list[str]] = None  # Foursquare category ids
    confidence: float = Field(ge=0.0, le=1.0)
    source: TranslationSource
    cached: bool = False

    def is_accepted(self, min_confidence: float = 0.7) -> bool:
        return self.confidence >= min_confidence


class CacheEntry(BaseModel):
    """Cached value plus the epoch second it was stored at."""
    value: Any
    stored_at: float
