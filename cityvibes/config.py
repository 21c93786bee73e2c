"""Configuration management using Pydantic BaseSettings with JSON file support."""
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


def flatten_json_config(config: dict[str, Any]) -> dict[str, Any]:
    """Flatten nested JSON config into flat key-value pairs.

    Supports nested structures like:
    {
        "foursquare": {"foursquare_api_key": "fsq3...", "foursquare_search_limit": 50},
        "ranking": {"ranking_min_score": 0.5}
    }

    Becomes:
    {"foursquare_api_key": "fsq3...", "foursquare_search_limit": 50, "ranking_min_score": 0.5}

    Keys starting with "_" (like "_comment") are skipped.
    """
    result = {}

    for key, value in config.items():
        if key.startswith("_"):
            continue

        if isinstance(value, dict):
            result.update(flatten_json_config(value))
        else:
            result[key] = value

    return result


def load_json_config(config_file: Optional[str] = None) -> dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        config_file: Path to JSON config file. If None, checks CONFIG_FILE env var.

    Returns:
        Dictionary of configuration values (flattened), or empty dict if no file found.
    """
    file_path = config_file or os.getenv("CONFIG_FILE")

    if not file_path:
        return {}

    path = Path(file_path)
    if not path.exists():
        logger.warning(f"Config file not found: {file_path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
            logger.info(f"Loaded configuration from: {file_path}")
            return flatten_json_config(config)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in config file {file_path}: {e}")
        return {}
    except OSError as e:
        logger.error(f"Error reading config file {file_path}: {e}")
        return {}


class Settings(BaseSettings):
    """Application configuration with JSON file and environment variable support.

    Configuration priority (highest to lowest):
    1. Environment variables
    2. JSON config file (specified via CONFIG_FILE env var)
    3. Default values
    """

    # Foursquare Places API Configuration
    foursquare_api_key: str = ""
    foursquare_base_url: str = "https://api.foursquare.com/v3"
    foursquare_timeout_seconds: float = 8.0
    foursquare_search_limit: int = 50

    # OpenAI Configuration (translation fallback + explanations)
    openai_api_key: str = ""
    translation_model: str = "gpt-4o-mini"
    explanation_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 10.0
    explanations_enabled: bool = True

    # Semantic translation
    translation_min_confidence: float = 0.7
    translation_llm_confidence_cap: float = 0.9
    translation_cache_ttl_seconds: int = 300  # 5 minutes
    translation_cache_backend: str = "memory"  # "memory" | "redis"
    cache_purge_interval_minutes: int = 5

    # Places search cache (0 disables)
    places_cache_ttl_seconds: int = 3600

    # Ranking
    ranking_min_score: float = 0.5
    ranking_max_results: int = 3
    validation_fallback_limit: int = 15

    # Redis Configuration (only used by the redis translation cache backend)
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_password: str = ""
    redis_db: int = 0

    # Server Configuration
    server_port: int = 8080
    log_level: str = "INFO"
    timezone: str = "America/Monterrey"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def __init__(self, **kwargs):
        """Initialize settings from JSON file and environment variables.

        Priority: env vars > JSON config > defaults
        """
        # Init kwargs outrank env vars in pydantic-settings, so env-provided
        # keys are dropped from the JSON layer
        env_keys = {key.lower() for key in os.environ}
        json_config = {
            key: value
            for key, value in load_json_config().items()
            if key.lower() not in env_keys
        }

        merged_kwargs = {**json_config, **kwargs}

        super().__init__(**merged_kwargs)

    @property
    def redis_address(self) -> str:
        """Get Redis connection address in host:port format."""
        return f"{self.redis_host}:{self.redis_port}"

    @property
    def foursquare_enabled(self) -> bool:
        return bool(self.foursquare_api_key)

    @property
    def openai_enabled(self) -> bool:
        return bool(self.openai_api_key)
