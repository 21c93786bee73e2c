"""Tests for settings loading from JSON config files and environment variables."""
import json

import pytest

from cityvibes.config import Settings, flatten_json_config, load_json_config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Write a nested JSON config and point CONFIG_FILE at it."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "_comment": "local overrides",
        "foursquare": {"foursquare_api_key": "fsq3-from-json", "foursquare_search_limit": 30},
        "ranking": {"ranking_min_score": 1.0, "ranking_max_results": 4},
    }), encoding="utf-8")
    monkeypatch.setenv("CONFIG_FILE", str(path))
    monkeypatch.delenv("FOURSQUARE_API_KEY", raising=False)
    monkeypatch.delenv("RANKING_MAX_RESULTS", raising=False)
    return path


class TestSettings:
    """Test configuration layering."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CONFIG_FILE", raising=False)
        monkeypatch.delenv("RANKING_MIN_SCORE", raising=False)
        monkeypatch.delenv("RANKING_MAX_RESULTS", raising=False)

        settings = Settings()

        assert settings.ranking_min_score == 0.5
        assert settings.ranking_max_results == 3
        assert settings.translation_cache_ttl_seconds == 300

    def test_json_file(self, config_file):
        settings = Settings()

        assert settings.foursquare_api_key == "fsq3-from-json"
        assert settings.foursquare_search_limit == 30
        assert settings.ranking_min_score == 1.0
        assert settings.foursquare_enabled is True

    def test_env_overrides_json(self, config_file, monkeypatch):
        monkeypatch.setenv("RANKING_MAX_RESULTS", "5")

        settings = Settings()

        assert settings.ranking_max_results == 5
        assert settings.ranking_min_score == 1.0

    def test_kwargs_override_everything(self, config_file):
        assert Settings(ranking_max_results=7).ranking_max_results == 7

    def test_redis_address(self, monkeypatch):
        monkeypatch.delenv("CONFIG_FILE", raising=False)
        settings = Settings(redis_host="localhost", redis_port=6380)
        assert settings.redis_address == "localhost:6380"


class TestJsonConfig:
    """Test JSON config helpers."""

    def test_flatten_skips_comments(self):
        flat = flatten_json_config({"_comment": "x", "a": {"b": 1, "c": {"d": 2}}, "e": 3})
        assert flat == {"b": 1, "d": 2, "e": 3}

    def test_missing_file(self, tmp_path):
        assert load_json_config(str(tmp_path / "absent.json")) == {}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_json_config(str(path)) == {}
