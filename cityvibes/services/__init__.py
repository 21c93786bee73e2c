"""Services package."""
from cityvibes.services.ranking_service import RankingService
from cityvibes.services.semantic_translator import SemanticTranslator
from cityvibes.services.place_search_service import PlaceSearchService
from cityvibes.services.explanation_service import ExplanationService

__all__ = ["RankingService", "SemanticTranslator", "PlaceSearchService", "ExplanationService"]
