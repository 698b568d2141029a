from typing import Any, Dict, List, Literal, Optional

ScentFamily = Literal["fresh", "floral", "woody", "amber", "gourmand", "musky"]
Performance = Literal["office-safe", "balanced", "loud"]
TemperatureBucket = Literal["hot", "warm", "mild", "cool", "cold"]
HumidityBucket = Literal["dry", "moderate", "humid"]

SCENT_FAMILIES = ("fresh", "floral", "woody", "amber", "gourmand", "musky")
PERFORMANCE_LEVELS = ("office-safe", "balanced", "loud")
TEMPERATURE_BUCKETS = ("hot", "warm", "mild", "cool", "cold")
HUMIDITY_BUCKETS = ("dry", "moderate", "humid")

OUTFIT_STYLES = ("clean", "minimalist", "streetwear", "romantic", "glam", "cozy", "corporate")
# Moods offered by the ritual wizard
MOODS = ("confident", "soft", "playful", "mysterious")
# Wider vocabulary the outfit analysis may infer
ANALYSIS_MOODS = MOODS + ("grounded", "magnetic", "powerful", "fresh", "warm", "sexy", "creative")
OCCASIONS = ("work", "date", "casual", "event", "home")

DEFAULT_FAMILY = "woody"

# Used when a catalog row is created from a user-submitted name
SCENT_FAMILY_DEFAULTS: Dict[str, Dict[str, List[str]]] = {
    "fresh": {
        "moods": ["playful", "confident"],
        "occasions": ["work", "casual", "date"],
        "outfit_styles": ["clean", "minimalist", "streetwear"],
        "aura_words": ["Crisp", "Energizing", "Clean"],
        "ideal_temperature": ["hot", "warm", "mild"],
    },
    "floral": {
        "moods": ["soft", "playful"],
        "occasions": ["date", "event", "casual"],
        "outfit_styles": ["romantic", "glam", "clean"],
        "aura_words": ["Romantic", "Elegant", "Graceful"],
        "ideal_temperature": ["warm", "mild", "cool"],
    },
    "woody": {
        "moods": ["confident", "mysterious"],
        "occasions": ["work", "date", "event"],
        "outfit_styles": ["corporate", "minimalist", "clean"],
        "aura_words": ["Grounded", "Sophisticated", "Timeless"],
        "ideal_temperature": ["mild", "cool", "cold"],
    },
    "amber": {
        "moods": ["confident", "mysterious"],
        "occasions": ["date", "event", "home"],
        "outfit_styles": ["glam", "romantic", "cozy"],
        "aura_words": ["Warm", "Sensual", "Rich"],
        "ideal_temperature": ["cool", "cold"],
    },
    "gourmand": {
        "moods": ["playful", "soft"],
        "occasions": ["casual", "date", "home"],
        "outfit_styles": ["cozy", "romantic", "streetwear"],
        "aura_words": ["Comforting", "Sweet", "Inviting"],
        "ideal_temperature": ["cool", "cold", "mild"],
    },
    "musky": {
        "moods": ["soft", "mysterious"],
        "occasions": ["date", "casual", "home"],
        "outfit_styles": ["minimalist", "clean", "cozy"],
        "aura_words": ["Subtle", "Intimate", "Skin-like"],
        "ideal_temperature": ["warm", "mild", "cool"],
    },
}

WEATHER_SCENT_RECOMMENDATIONS: Dict[str, Dict[str, Any]] = {
    "hot": {
        "recommended": ["fresh", "musky"],
        "avoid": ["gourmand", "amber"],
        "note": "Heat amplifies heavy notes, go lighter",
    },
    "warm": {
        "recommended": ["fresh", "floral", "musky"],
        "avoid": ["gourmand"],
        "note": "Florals bloom beautifully in warmth",
    },
    "mild": {
        "recommended": ["floral", "woody", "fresh"],
        "avoid": [],
        "note": "Most versatile weather for fragrance",
    },
    "cool": {
        "recommended": ["woody", "amber", "gourmand"],
        "avoid": [],
        "note": "Richer scents shine in cool air",
    },
    "cold": {
        "recommended": ["amber", "gourmand", "woody"],
        "avoid": ["fresh"],
        "note": "Bold, warm scents cut through cold",
    },
}

OCCASION_PERFORMANCE_FIT: Dict[str, List[str]] = {
    "work": ["office-safe", "balanced"],
    "date": ["balanced", "loud"],
    "casual": ["office-safe", "balanced"],
    "event": ["balanced", "loud"],
    "home": ["office-safe", "balanced"],
}


def is_scent_family(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in SCENT_FAMILIES


def normalize_family(value: Optional[str]) -> str:
    """Coerce a free-form family name onto the fixed enum, defaulting to woody."""
    v = (value or "").strip().lower()
    return v if v in SCENT_FAMILIES else DEFAULT_FAMILY


def family_defaults(family: Optional[str]) -> Dict[str, List[str]]:
    return SCENT_FAMILY_DEFAULTS[normalize_family(family)]


def get_taxonomy() -> Dict[str, Any]:
    return {
        "scent_families": list(SCENT_FAMILIES),
        "performance_levels": list(PERFORMANCE_LEVELS),
        "temperature_buckets": list(TEMPERATURE_BUCKETS),
        "humidity_buckets": list(HUMIDITY_BUCKETS),
        "outfit_styles": list(OUTFIT_STYLES),
        "moods": list(MOODS),
        "analysis_moods": list(ANALYSIS_MOODS),
        "occasions": list(OCCASIONS),
        "weather_scent_recommendations": WEATHER_SCENT_RECOMMENDATIONS,
        "occasion_performance_fit": OCCASION_PERFORMANCE_FIT,
    }
