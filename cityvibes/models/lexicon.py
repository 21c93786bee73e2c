"""Fixed vibe vocabulary for mood resolution and place ranking.

Pure data plus a few lookups. Spanish (Mexican) slang is the primary input
language; English keywords are accepted where users commonly mix them in.
Every table here is read-only at runtime.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from cityvibes.models.vibe import MoodGroup


# =============================================================================
# TOKEN EXPANSIONS
# =============================================================================

# key -> related tokens. A key found in the input contributes itself plus all
# its expansions; an expansion found in the input contributes itself plus key.
VIBE_EXPANSIONS: dict[str, list[str]] = {
    # Melancholic
    "bajoneado": ["melancólico", "introspectivo", "tranquilo", "café", "solo", "pensativo"],
    "deprimido": ["melancólico", "introspectivo", "tranquilo", "café", "contemplativo"],
    "triste": ["melancólico", "nostálgico", "tranquilo", "introspectivo"],
    "sad": ["melancólico", "nostálgico", "introspectivo", "contemplativo"],
    "downbad": ["melancólico", "solo", "introspectivo", "café"],
    "solo": ["tranquilo", "café", "introspectivo", "contemplativo"],
    "melancólico": ["nostálgico", "introspectivo", "tranquilo", "pensativo"],
    "nostálgico": ["melancólico", "tradicional", "vintage", "retro"],

    # Party
    "bellakeo": ["reggaeton", "fiesta", "perrea", "antro", "dembow", "urbano", "noche"],
    "perrea": ["reggaeton", "bellakeo", "fiesta", "antro", "dembow", "baile"],
    "reggaeton": ["bellakeo", "perrea", "fiesta", "antro", "urbano"],
    "fiesta": ["música", "baile", "noche", "diversión", "bellakeo", "antro"],
    "antro": ["fiesta", "noche", "bellakeo", "joven", "música"],
    "baile": ["música", "fiesta", "noche", "diversión"],

    # Chill
    "chill": ["relajado", "café", "tranquilo", "cozy", "lofi", "productivo"],
    "relajado": ["chill", "tranquilo", "cozy", "café", "descanso"],
    "tranquilo": ["chill", "relajado", "cozy", "silencio", "paz"],
    "cozy": ["chill", "relajado", "acogedor", "café", "íntimo"],
    "productivo": ["trabajo", "estudio", "wifi", "silencio", "focus", "café"],
    "trabajo": ["productivo", "wifi", "silencio", "café", "oficina"],
    "estudio": ["productivo", "silencio", "wifi", "biblioteca", "focus"],

    # Romantic
    "romántico": ["íntimo", "pareja", "elegante", "cena", "especial", "terraza"],
    "pareja": ["romántico", "íntimo", "especial", "cena", "privado"],
    "íntimo": ["romántico", "pareja", "acogedor", "privado", "especial"],
    "cena": ["romántico", "elegante", "noche", "especial", "gourmet"],

    # Place categories
    "café": ["chill", "productivo", "tranquilo", "trabajo", "cozy"],
    "bar": ["noche", "cóctel", "amigos", "relajado", "social"],
    "restaurante": ["comida", "cena", "familiar", "gourmet", "sabor"],
    "museo": ["cultura", "arte", "educativo", "tranquilo", "inspirador"],
    "parque": ["aire libre", "ejercicio", "familiar", "naturaleza", "relajado"],

    # Traits
    "elegante": ["sofisticado", "exclusivo", "gourmet", "romántico", "especial"],
    "casual": ["familiar", "relajado", "sencillo", "económico", "cómodo"],
    "tradicional": ["auténtico", "familiar", "cultura", "historia", "típico"],
    "moderno": ["contemporáneo", "trendy", "nuevo", "innovador", "actual"],
    "familiar": ["niños", "grupo", "casual", "acogedor", "tradicional"],
}


# =============================================================================
# VIBE CLASSIFICATION (single table for mood group + primary vibe + rules)
# =============================================================================

class VibeRule(BaseModel):
    """One primary vibe: how it is detected and which places it accepts."""
    vibe: str
    mood_group: MoodGroup
    keywords: list[str]
    excluded_categories: frozenset[str] = frozenset()
    required_categories: frozenset[str] = frozenset()
    reason: str = ""

    model_config = ConfigDict(frozen=True)


# Iteration order is the tie-breaker: first match wins for both mood-group
# detection (substring over the raw input) and primary-vibe detection
# (exact token match).
VIBE_RULES: list[VibeRule] = [
    VibeRule(
        vibe="bellakeo",
        mood_group=MoodGroup.NIGHTLIFE,
        keywords=["bellakeo", "reggaeton", "perrea", "perreo", "antro", "fiesta",
                  "dembow", "urbano", "baile", "reventón", "nightclub"],
        excluded_categories=frozenset({"parque", "plaza", "biblioteca", "museo", "universidad", "cafetería"}),
        required_categories=frozenset({"antro", "bar", "club", "salón", "restaurante"}),
        reason="Bellakeo requiere música fuerte y espacio de baile",
    ),
    VibeRule(
        vibe="productivo",
        mood_group=MoodGroup.PRODUCTIVE,
        keywords=["productivo", "trabajo", "estudio", "concentración", "grind", "focus", "wifi"],
        excluded_categories=frozenset({"antro", "bar", "club", "salón"}),
        required_categories=frozenset({"café", "cafetería", "biblioteca", "coworking", "universidad"}),
        reason="Productivo requiere silencio y concentración",
    ),
    VibeRule(
        vibe="eco",
        mood_group=MoodGroup.OUTDOOR,
        keywords=["eco", "naturaleza", "verde", "outdoor", "aire libre", "ejercicio", "parque"],
        excluded_categories=frozenset({"antro", "bar", "club"}),
        required_categories=frozenset({"parque", "jardín", "naturaleza", "plaza"}),
        reason="Eco requiere espacios naturales o al aire libre",
    ),
    VibeRule(
        vibe="romántico",
        mood_group=MoodGroup.ROMANTIC,
        keywords=["romántico", "romantico", "romantic", "íntimo", "pareja", "date", "elegante", "cena"],
        excluded_categories=frozenset({"antro", "biblioteca", "universidad"}),
        required_categories=frozenset({"restaurante", "bar", "café", "cafetería", "mirador"}),
        reason="Romántico requiere ambiente íntimo",
    ),
    VibeRule(
        vibe="sad",
        mood_group=MoodGroup.MELANCHOLIC,
        keywords=["sad", "downbad", "bajoneado", "deprimido", "melancólico", "nostálgico", "triste", "solo"],
        excluded_categories=frozenset({"antro", "club"}),
        required_categories=frozenset({"café", "cafetería", "parque", "bar", "restaurante"}),
        reason="Sad requiere espacios tranquilos para reflexionar",
    ),
    VibeRule(
        vibe="familiar",
        mood_group=MoodGroup.SOCIAL,
        keywords=["familiar", "familia", "niños", "tradicional", "casual", "amigos", "grupo"],
        excluded_categories=frozenset({"antro", "bar", "club"}),
        required_categories=frozenset({"restaurante", "parque", "museo", "plaza", "zona", "atracción"}),
        reason="Familiar requiere espacios apropiados para niños",
    ),
    VibeRule(
        vibe="cultura",
        mood_group=MoodGroup.CULTURE,
        keywords=["cultura", "cultural", "arte", "museo", "teatro", "galería", "historia"],
        excluded_categories=frozenset({"antro", "club"}),
        required_categories=frozenset({"museo", "teatro", "galería", "zona", "universidad"}),
        reason="Cultura requiere espacios educativos o artísticos",
    ),
    VibeRule(
        vibe="comida",
        mood_group=MoodGroup.FOOD,
        keywords=["hambre", "comer", "comida", "gourmet", "mariscos", "botanear", "tacos", "delicioso"],
        reason="Comida acepta cualquier lugar con cocina",
    ),
    VibeRule(
        vibe="chill",
        mood_group=MoodGroup.CHILL,
        keywords=["chill", "relajado", "tranquilo", "cozy", "lofi"],
        required_categories=frozenset({"café", "cafetería", "restaurante", "bar", "parque", "plaza"}),
        reason="Chill permite espacios relajados variados",
    ),
]

VIBE_RULES_BY_NAME: dict[str, VibeRule] = {rule.vibe: rule for rule in VIBE_RULES}

# Most permissive rule set; used when no keyword matches
DEFAULT_PRIMARY_VIBE = "chill"


# =============================================================================
# MOOD GROUP BONUS
# =============================================================================

# group -> (categories worth +1.0, tags worth +0.8)
MOOD_GROUP_AFFINITY: dict[MoodGroup, tuple[frozenset[str], frozenset[str]]] = {
    MoodGroup.NIGHTLIFE: (
        frozenset({"antro", "club", "bar", "salón"}),
        frozenset({"antro", "fiesta", "reggaeton", "baile", "bellakeo", "nightclub"}),
    ),
    MoodGroup.PRODUCTIVE: (
        frozenset({"café", "cafetería", "coworking", "biblioteca"}),
        frozenset({"wifi", "productivo", "trabajo", "estudio", "coworking"}),
    ),
    MoodGroup.CHILL: (
        frozenset({"café", "cafetería", "parque"}),
        frozenset({"chill", "relajado", "tranquilo", "cozy", "café"}),
    ),
    MoodGroup.ROMANTIC: (
        frozenset({"restaurante", "mirador"}),
        frozenset({"romántico", "elegante", "íntimo", "terraza"}),
    ),
    MoodGroup.MELANCHOLIC: (
        frozenset({"café", "cafetería"}),
        frozenset({"café", "tranquilo", "cozy", "introspectivo"}),
    ),
    MoodGroup.CULTURE: (
        frozenset({"museo", "teatro", "galería"}),
        frozenset({"arte", "cultura", "museo", "historia"}),
    ),
    MoodGroup.OUTDOOR: (
        frozenset({"parque", "jardín", "plaza", "mirador"}),
        frozenset({"aire libre", "naturaleza", "parque", "outdoor"}),
    ),
    MoodGroup.FOOD: (
        frozenset({"restaurante", "mercado"}),
        frozenset({"comida", "gourmet", "mariscos", "tacos"}),
    ),
    MoodGroup.SOCIAL: (
        frozenset({"restaurante", "plaza", "bar"}),
        frozenset({"familiar", "grupo", "amigos", "casual"}),
    ),
}


# =============================================================================
# QUERY BUILDING
# =============================================================================

# Token -> English search term, grouped by kind. Query priority is
# activity, then atmosphere, then place category.
ACTIVITY_TERMS: dict[str, str] = {
    "baile": "dance",
    "bailar": "dance",
    "perrea": "dance",
    "perreo": "dance",
    "reggaeton": "reggaeton",
    "dembow": "reggaeton",
    "fiesta": "party",
    "música": "live music",
    "trabajo": "work",
    "estudio": "study",
    "ejercicio": "exercise",
    "cena": "dinner",
    "comer": "food",
    "comida": "food",
    "botanear": "snacks",
}

ATMOSPHERE_TERMS: dict[str, str] = {
    "chill": "relaxed",
    "relajado": "relaxed",
    "tranquilo": "quiet",
    "silencio": "quiet",
    "cozy": "cozy",
    "acogedor": "cozy",
    "romántico": "romantic",
    "íntimo": "intimate",
    "elegante": "upscale",
    "urbano": "urban",
    "melancólico": "quiet",
    "familiar": "family",
    "casual": "casual",
    "tradicional": "traditional",
    "moderno": "modern",
}

PLACE_CATEGORY_TERMS: dict[str, str] = {
    "antro": "nightclub",
    "bar": "bar",
    "café": "cafe",
    "cafetería": "cafe",
    "restaurante": "restaurant",
    "museo": "museum",
    "parque": "park",
    "biblioteca": "library",
    "teatro": "theater",
    "galería": "art gallery",
    "coworking": "coworking",
    "terraza": "rooftop",
}


# =============================================================================
# SEMANTIC TRANSLATION DICTIONARY
# =============================================================================

# Foursquare category ids used by the dictionary and the LLM prompt
FOURSQUARE_CATEGORY_IDS: dict[str, str] = {
    "arts_entertainment": "10000",
    "nightlife": "13002",
    "bar": "13003",
    "cafe": "13032",
    "restaurant": "13065",
    "outdoors": "16000",
}

_NIGHTLIFE = FOURSQUARE_CATEGORY_IDS["nightlife"]
_BAR = FOURSQUARE_CATEGORY_IDS["bar"]
_CAFE = FOURSQUARE_CATEGORY_IDS["cafe"]
_RESTAURANT = FOURSQUARE_CATEGORY_IDS["restaurant"]
_ARTS = FOURSQUARE_CATEGORY_IDS["arts_entertainment"]
_OUTDOORS = FOURSQUARE_CATEGORY_IDS["outdoors"]


class DictionaryEntry(BaseModel):
    query: str
    categories: Optional[list[str]] = None
    confidence: float

    model_config = ConfigDict(frozen=True)


VIBE_DICTIONARY: dict[str, DictionaryEntry] = {
    # Nightlife & party
    "bellakeo": DictionaryEntry(query="nightclub dance reggaeton", categories=[_NIGHTLIFE], confidence=0.95),
    "perreo": DictionaryEntry(query="dance club reggaeton", categories=[_NIGHTLIFE], confidence=0.95),
    "antro": DictionaryEntry(query="nightclub bar", categories=[_NIGHTLIFE, _BAR], confidence=0.9),
    "reventón": DictionaryEntry(query="party venue nightclub", categories=[_NIGHTLIFE], confidence=0.85),
    "fiesta": DictionaryEntry(query="party nightlife", categories=[_NIGHTLIFE], confidence=0.8),
    "baile": DictionaryEntry(query="dance club", categories=[_NIGHTLIFE], confidence=0.8),

    # Romance
    "romántico": DictionaryEntry(query="romantic restaurant intimate", categories=[_RESTAURANT], confidence=0.9),
    "íntimo": DictionaryEntry(query="intimate restaurant cozy", categories=[_RESTAURANT], confidence=0.85),
    "cena": DictionaryEntry(query="dinner restaurant", categories=[_RESTAURANT], confidence=0.8),
    "date": DictionaryEntry(query="romantic restaurant", categories=[_RESTAURANT], confidence=0.8),
    "pareja": DictionaryEntry(query="romantic dining", categories=[_RESTAURANT], confidence=0.8),

    # Chill
    "chill": DictionaryEntry(query="coffee shop relaxed", categories=[_CAFE], confidence=0.85),
    "tranquilo": DictionaryEntry(query="quiet cafe peaceful", categories=[_CAFE], confidence=0.85),
    "relajado": DictionaryEntry(query="relaxed atmosphere", categories=[_CAFE, _BAR], confidence=0.8),
    "cozy": DictionaryEntry(query="cozy cafe comfortable", categories=[_CAFE], confidence=0.85),

    # Productive
    "productivo": DictionaryEntry(query="coffee shop wifi work", categories=[_CAFE], confidence=0.9),
    "trabajo": DictionaryEntry(query="coworking cafe wifi", categories=[_CAFE], confidence=0.85),
    "estudio": DictionaryEntry(query="study space quiet", categories=[_CAFE], confidence=0.85),
    "wifi": DictionaryEntry(query="coffee shop internet", categories=[_CAFE], confidence=0.8),
    "focus": DictionaryEntry(query="quiet workspace", categories=[_CAFE], confidence=0.8),

    # Food
    "botanear": DictionaryEntry(query="bar appetizers tapas", categories=[_BAR], confidence=0.9),
    "mariscos": DictionaryEntry(query="seafood restaurant", categories=[_RESTAURANT], confidence=0.95),
    "gourmet": DictionaryEntry(query="fine dining restaurant", categories=[_RESTAURANT], confidence=0.9),
    "tradicional": DictionaryEntry(query="traditional restaurant local", categories=[_RESTAURANT], confidence=0.85),
    "comida": DictionaryEntry(query="restaurant food", categories=[_RESTAURANT], confidence=0.7),

    # Culture
    "cultura": DictionaryEntry(query="museum cultural center", categories=[_ARTS], confidence=0.85),
    "arte": DictionaryEntry(query="art gallery museum", categories=[_ARTS], confidence=0.85),
    "museo": DictionaryEntry(query="museum", categories=[_ARTS], confidence=0.95),
    "teatro": DictionaryEntry(query="theater", categories=[_ARTS], confidence=0.95),

    # Outdoor
    "aire libre": DictionaryEntry(query="outdoor park", categories=[_OUTDOORS], confidence=0.8),
    "parque": DictionaryEntry(query="park outdoor", categories=[_OUTDOORS], confidence=0.9),
    "naturaleza": DictionaryEntry(query="nature outdoor", categories=[_OUTDOORS], confidence=0.8),
}


# =============================================================================
# PLACE CATEGORY CANONICALIZATION
# =============================================================================

# Foursquare category names (English or Spanish locale) -> canonical label used
# by the category rules. Unlisted names are kept lower-cased as-is.
CATEGORY_ALIASES: dict[str, str] = {
    "nightclub": "antro",
    "night club": "antro",
    "dance club": "antro",
    "discoteca": "antro",
    "club nocturno": "antro",
    "bar": "bar",
    "cocktail bar": "bar",
    "pub": "bar",
    "lounge": "bar",
    "sports bar": "bar",
    "beer bar": "bar",
    "cantina": "bar",
    "karaoke bar": "bar",
    "event space": "salón",
    "salón de eventos": "salón",
    "café": "café",
    "cafe": "café",
    "coffee shop": "cafetería",
    "cafetería": "cafetería",
    "tea room": "café",
    "restaurant": "restaurante",
    "restaurante": "restaurante",
    "mexican restaurant": "restaurante",
    "seafood restaurant": "restaurante",
    "taco restaurant": "restaurante",
    "steakhouse": "restaurante",
    "park": "parque",
    "parque": "parque",
    "plaza": "plaza",
    "garden": "jardín",
    "botanical garden": "jardín",
    "nature preserve": "naturaleza",
    "scenic lookout": "mirador",
    "library": "biblioteca",
    "biblioteca": "biblioteca",
    "coworking space": "coworking",
    "college and university": "universidad",
    "university": "universidad",
    "museum": "museo",
    "art museum": "museo",
    "history museum": "museo",
    "museo": "museo",
    "theater": "teatro",
    "teatro": "teatro",
    "art gallery": "galería",
    "galería de arte": "galería",
    "market": "mercado",
    "farmers market": "mercado",
    "amusement park": "atracción",
    "tourist attraction": "atracción",
}

DEFAULT_CATEGORY = "general"


def canonical_category(name: Optional[str]) -> str:
    """Map a raw category name to the canonical label used by the category rules."""
    if not name or not name.strip():
        return DEFAULT_CATEGORY
    lowered = name.strip().lower()
    return CATEGORY_ALIASES.get(lowered, lowered)


# =============================================================================
# EXPLANATION TONES
# =============================================================================

TONE_MAP: dict[str, str] = {
    "perrea": "urbano relajado 🔥💃",
    "bellakeo": "urbano relajado 🔥💃",
    "dembow": "urbano relajado 🔥💃",
    "chill": "tranquilo ☕🎧",
    "cozy": "tranquilo ☕🎧",
    "lofi": "tranquilo ☕🎧",
    "sad": "empático 💙🌧️",
    "downbad": "empático 💙🌧️",
    "productivo": "motivador 🚀📈",
    "grind": "motivador 🚀📈",
    "eco": "consciente 🌱♻️",
}

DEFAULT_TONE = "amistoso"


def tone_for_mood(mood: str) -> str:
    lowered = mood.lower()
    for key, tone in TONE_MAP.items():
        if key in lowered:
            return tone
    return DEFAULT_TONE
