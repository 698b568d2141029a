from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """Weights, thresholds and bucket boundaries for the recommender."""

    # additive weights
    family: float = 30.0
    secondary_family_ratio: float = 0.5
    mood: float = 25.0
    occasion: float = 20.0
    weather: float = 15.0
    temperature_boost_multiplier: float = 5.0
    outfit_style: float = 10.0
    favorite: float = 5.0
    never_worn_bonus: float = 5.0
    # (max days since worn, score delta), checked in order
    recency_penalties: tuple[tuple[float, float], ...] = ((1.0, -50.0), (3.0, -25.0), (7.0, -10.0))
    jitter_span: float = 3.0

    # classification floors
    perfect_match: float = 80.0
    strong_match: float = 60.0
    good_match: float = 40.0

    # temperature floors in Celsius
    hot_min_c: float = 30.0
    warm_min_c: float = 23.0
    mild_min_c: float = 15.0
    cool_min_c: float = 5.0
    # humidity: below dry_below is dry, up to moderate_max inclusive is moderate
    dry_below_pct: float = 40.0
    moderate_max_pct: float = 65.0


DEFAULT_CONFIG = ScoringConfig()
