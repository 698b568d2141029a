from aure.core.taxonomy import HumidityBucket, TemperatureBucket
from aure.recs.config import DEFAULT_CONFIG, ScoringConfig


def categorize_temperature(celsius: float, config: ScoringConfig = DEFAULT_CONFIG) -> TemperatureBucket:
    if celsius >= config.hot_min_c:
        return "hot"
    if celsius >= config.warm_min_c:
        return "warm"
    if celsius >= config.mild_min_c:
        return "mild"
    if celsius >= config.cool_min_c:
        return "cool"
    return "cold"


def categorize_humidity(percent: float, config: ScoringConfig = DEFAULT_CONFIG) -> HumidityBucket:
    if percent < config.dry_below_pct:
        return "dry"
    if percent <= config.moderate_max_pct:
        return "moderate"
    return "humid"
