"""Context scorer for a user's own collection.

Every owned fragrance is scored against the session context with fixed additive weights,
then the highest score wins. A little random jitter is added so repeated identical requests
do not always return the same bottle; pass ``rng=NO_JITTER`` (or a seeded ``random.Random``)
to make results reproducible.
"""
import logging
import random
from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol

from aure.recs.config import DEFAULT_CONFIG, ScoringConfig
from aure.recs.types import Candidate, PerfumeProfile, RankedRecommendation, ScoreBreakdown, ScoringContext

logger = logging.getLogger("uvicorn.error")


class JitterSource(Protocol):
    def random(self) -> float:
        ...


class _NoJitter:
    def random(self) -> float:
        return 0.0


NO_JITTER: JitterSource = _NoJitter()
_default_rng = random.Random()


def _as_utc(ts: datetime) -> datetime:
    # naive timestamps come back from some drivers; they are stored as UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def days_since(ts: datetime, now: datetime) -> float:
    return (_as_utc(now) - _as_utc(ts)).total_seconds() / 86400.0


def _recency_term(last_worn_at: Optional[datetime], now: datetime, config: ScoringConfig) -> float:
    if last_worn_at is None:
        return config.never_worn_bonus
    days = days_since(last_worn_at, now)
    for max_days, delta in config.recency_penalties:
        if days < max_days:
            return delta
    return 0.0


def score_breakdown(
    context: ScoringContext,
    candidate: Candidate,
    *,
    now: Optional[datetime] = None,
    rng: Optional[JitterSource] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> ScoreBreakdown:
    perfume: Optional[PerfumeProfile] = candidate.perfume
    if perfume is None:
        raise ValueError(f"candidate {candidate.user_perfume_id} has no catalog row")
    now = now or datetime.now(timezone.utc)
    rng = rng or _default_rng
    out = ScoreBreakdown()

    if perfume.scent_family in context.scent_directions:
        out.add("family", config.family)
    elif perfume.secondary_family and perfume.secondary_family in context.scent_directions:
        out.add("family", config.family * config.secondary_family_ratio)

    if context.mood in perfume.moods:
        out.add("mood", config.mood)

    if context.occasion in perfume.occasions:
        out.add("occasion", config.occasion)

    if context.weather_bucket and context.weather_bucket in perfume.ideal_temperature:
        out.add("weather", config.weather)
        if perfume.temperature_boost is not None:
            out.add("weather_boost", perfume.temperature_boost * config.temperature_boost_multiplier)

    if context.outfit_styles:
        matches = sum(1 for s in context.outfit_styles if s in perfume.outfit_styles)
        out.add("outfit_style", matches / max(len(context.outfit_styles), 1) * config.outfit_style)

    if candidate.is_favorite:
        out.add("favorite", config.favorite)

    recency = _recency_term(candidate.last_worn_at, now, config)
    if recency:
        out.add("recency", recency)

    out.add("jitter", rng.random() * config.jitter_span)

    out.total = max(0.0, sum(out.terms.values()))
    return out


def score(
    context: ScoringContext,
    candidate: Candidate,
    *,
    now: Optional[datetime] = None,
    rng: Optional[JitterSource] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> float:
    return score_breakdown(context, candidate, now=now, rng=rng, config=config).total


def rank_all(
    context: ScoringContext,
    candidates: Iterable[Candidate],
    *,
    now: Optional[datetime] = None,
    rng: Optional[JitterSource] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> list[RankedRecommendation]:
    now = now or datetime.now(timezone.utc)
    ranked: list[RankedRecommendation] = []
    for cand in candidates:
        if cand.perfume is None:
            logger.warning("recs: skipping orphaned collection entry user_perfume_id=%s", cand.user_perfume_id)
            continue
        breakdown = score_breakdown(context, cand, now=now, rng=rng, config=config)
        logger.debug("recs: scored %s total=%.2f terms=%s", cand.perfume.name, breakdown.total, breakdown.terms)
        ranked.append(RankedRecommendation(candidate=cand, score=breakdown.total, breakdown=breakdown))
    # stable sort keeps input order among exact ties
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked


def rank(
    context: ScoringContext,
    candidates: Iterable[Candidate],
    *,
    now: Optional[datetime] = None,
    rng: Optional[JitterSource] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> Optional[RankedRecommendation]:
    """Top-scoring candidate, or None when nothing can be recommended."""
    ranked = rank_all(context, candidates, now=now, rng=rng, config=config)
    return ranked[0] if ranked else None
