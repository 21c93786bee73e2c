"""Unit tests for category validation rules."""
import pytest
from unittest.mock import patch

from cityvibes.models import MoodGroup, Place
from cityvibes.models.lexicon import VibeRule
from cityvibes.services import category_validator
from cityvibes.services.category_validator import (
    filter_compatible,
    get_available_vibes,
    get_vibe_from_tokens,
    get_vibe_reason,
    is_compatible,
)


def make_place(name: str, category: str) -> Place:
    return Place(name=name, category=category, city="Monterrey")


class TestIsCompatible:
    """Test is_compatible rule evaluation."""

    @pytest.mark.parametrize("category", ["parque", "plaza", "biblioteca", "museo", "cafetería"])
    def test_bellakeo_excluded_categories(self, category):
        """Quiet or outdoor places never host a bellakeo."""
        assert is_compatible("bellakeo", make_place("X", category)) is False

    @pytest.mark.parametrize("category", ["antro", "bar", "club"])
    def test_bellakeo_required_categories(self, category):
        """Nightlife categories are accepted for bellakeo."""
        assert is_compatible("bellakeo", make_place("X", category)) is True

    def test_required_set_rejects_other_categories(self):
        """A category outside a non-empty required set is rejected."""
        assert is_compatible("productivo", make_place("Gym", "gimnasio")) is False
        assert is_compatible("productivo", make_place("Bar", "bar")) is False
        assert is_compatible("productivo", make_place("Work", "coworking")) is True

    def test_unknown_vibe_accepts_everything(self):
        """Vibes without a rule never reject."""
        assert is_compatible("astral", make_place("Antro", "antro")) is True

    def test_rule_without_sets_accepts_everything(self):
        """Open rules (no exclusions, no requirements) accept any category."""
        assert is_compatible("comida", make_place("Any", "general")) is True

    def test_exclusion_wins_over_requirement(self):
        """A category that is both excluded and required is rejected."""
        rule = VibeRule(
            vibe="mixto",
            mood_group=MoodGroup.SOCIAL,
            keywords=["mixto"],
            excluded_categories=frozenset({"bar"}),
            required_categories=frozenset({"bar", "restaurante"}),
        )
        with patch.dict(category_validator.VIBE_RULES_BY_NAME, {"mixto": rule}):
            assert is_compatible("mixto", make_place("Bar", "bar")) is False
            assert is_compatible("mixto", make_place("Resto", "restaurante")) is True

    def test_category_compared_lower_case(self):
        """Place categories are normalized to lower case."""
        assert is_compatible("bellakeo", make_place("X", "PARQUE")) is False

    def test_filter_compatible_keeps_order(self):
        """Filtering keeps the candidates' original order."""
        places = [
            make_place("A", "bar"),
            make_place("B", "parque"),
            make_place("C", "antro"),
        ]
        assert [p.name for p in filter_compatible("bellakeo", places)] == ["A", "C"]


class TestVibeFromTokens:
    """Test primary vibe detection."""

    @pytest.mark.parametrize("tokens,expected", [
        (["perreo"], "bellakeo"),
        (["wifi", "café"], "productivo"),
        (["naturaleza"], "eco"),
        (["pareja"], "romántico"),
        (["downbad"], "sad"),
        (["museo"], "cultura"),
        (["tacos"], "comida"),
        (["relajado"], "chill"),
    ])
    def test_keyword_match(self, tokens, expected):
        """Each rule is found by its keywords."""
        assert get_vibe_from_tokens(tokens) == expected

    def test_table_order_breaks_ties(self):
        """When tokens hit several rules, the first rule in the table wins."""
        assert get_vibe_from_tokens(["chill", "fiesta"]) == "bellakeo"

    def test_default_is_chill(self):
        """No keyword match gives the most permissive vibe."""
        assert get_vibe_from_tokens(["asdkjaslkdj"]) == "chill"
        assert get_vibe_from_tokens([]) == "chill"


class TestVibeCatalog:
    """Test vibe listing helpers."""

    def test_available_vibes(self):
        vibes = get_available_vibes()
        assert "bellakeo" in vibes
        assert "chill" in vibes
        assert len(vibes) == len(set(vibes))

    def test_vibe_reason(self):
        assert "Bellakeo" in get_vibe_reason("bellakeo")
        assert get_vibe_reason("astral") == "Vibe general"
