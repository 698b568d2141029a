from typing import Literal

from aure.recs.config import DEFAULT_CONFIG, ScoringConfig

RecommendationType = Literal["perfect-match", "strong-match", "good-match", "suggested"]


def classify(score: float, config: ScoringConfig = DEFAULT_CONFIG) -> RecommendationType:
    if score >= config.perfect_match:
        return "perfect-match"
    if score >= config.strong_match:
        return "strong-match"
    if score >= config.good_match:
        return "good-match"
    return "suggested"
