"""External API clients package."""
from cityvibes.api.foursquare_client import FoursquareAPIClient, FoursquareAPIError, map_to_place
from cityvibes.api.openai_completion_client import OpenAICompletionClient

__all__ = ["FoursquareAPIClient", "FoursquareAPIError", "map_to_place", "OpenAICompletionClient"]
