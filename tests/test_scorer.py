import random
from datetime import datetime, timedelta, timezone

import pytest

from aure.recs.classify import classify
from aure.recs.scorer import NO_JITTER, rank, rank_all, score, score_breakdown
from aure.recs.types import Candidate, PerfumeProfile, RankedRecommendation, ScoreBreakdown, ScoringContext

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _profile(**kw):
    base = dict(
        perfume_id="p1",
        name="Santal 33",
        house="Le Labo",
        scent_family="woody",
        moods=("confident", "mysterious"),
        occasions=("work", "date"),
        outfit_styles=("minimalist", "clean"),
        ideal_temperature=("mild", "cool"),
        aura_words=("Grounded", "Warm"),
    )
    base.update(kw)
    return PerfumeProfile(**base)


def _ctx(**kw):
    base = dict(scent_directions=frozenset({"woody", "fresh"}), mood="confident", occasion="work")
    base.update(kw)
    return ScoringContext(**base)


def test_perfect_match_with_jitter_disabled():
    cand = Candidate(user_perfume_id="u1", perfume=_profile())
    ctx = _ctx(outfit_styles=("streetwear",))
    assert score(ctx, cand, now=NOW, rng=NO_JITTER) == 80
    assert classify(score(ctx, cand, now=NOW, rng=NO_JITTER)) == "perfect-match"


def test_jitter_stays_within_span():
    cand = Candidate(user_perfume_id="u1", perfume=_profile())
    rng = random.Random(7)
    for _ in range(50):
        s = score(_ctx(), cand, now=NOW, rng=rng)
        assert 80 <= s < 83


def test_recent_wear_sinks_score():
    # family + mood only = 55, worn twelve hours ago
    cand = Candidate(
        user_perfume_id="u1",
        perfume=_profile(occasions=()),
        last_worn_at=NOW - timedelta(hours=12),
    )
    s = score(_ctx(), cand, now=NOW, rng=NO_JITTER)
    assert s == 5
    assert classify(s) == "suggested"


@pytest.mark.parametrize(
    "days, expected",
    [(0.5, -50), (2, -25), (5, -10), (7, 0), (30, 0)],
)
def test_recency_steps(days, expected):
    cand = Candidate(user_perfume_id="u1", perfume=_profile(), last_worn_at=NOW - timedelta(days=days))
    breakdown = score_breakdown(_ctx(), cand, now=NOW, rng=NO_JITTER)
    assert breakdown.terms.get("recency", 0) == expected


def test_naive_last_worn_is_treated_as_utc():
    naive = (NOW - timedelta(hours=2)).replace(tzinfo=None)
    cand = Candidate(user_perfume_id="u1", perfume=_profile(), last_worn_at=naive)
    assert score_breakdown(_ctx(), cand, now=NOW, rng=NO_JITTER).terms["recency"] == -50


def test_floor_at_zero():
    cand = Candidate(
        user_perfume_id="u1",
        perfume=_profile(scent_family="gourmand", moods=(), occasions=()),
        last_worn_at=NOW - timedelta(minutes=5),
    )
    assert score(_ctx(), cand, now=NOW, rng=NO_JITTER) == 0


def test_secondary_family_gets_half_weight():
    cand = Candidate(user_perfume_id="u1", perfume=_profile(scent_family="floral", secondary_family="woody"))
    terms = score_breakdown(_ctx(), cand, now=NOW, rng=NO_JITTER).terms
    assert terms["family"] == 15


def test_weather_and_boost_only_when_bucket_matches():
    cand = Candidate(user_perfume_id="u1", perfume=_profile(temperature_boost=1.5))
    hit = score_breakdown(_ctx(weather_bucket="cool"), cand, now=NOW, rng=NO_JITTER).terms
    assert hit["weather"] == 15
    assert hit["weather_boost"] == 7.5
    miss = score_breakdown(_ctx(weather_bucket="hot"), cand, now=NOW, rng=NO_JITTER).terms
    assert "weather" not in miss
    assert "weather_boost" not in miss


def test_outfit_overlap_fraction():
    cand = Candidate(user_perfume_id="u1", perfume=_profile())
    terms = score_breakdown(_ctx(outfit_styles=("clean", "glam")), cand, now=NOW, rng=NO_JITTER).terms
    assert terms["outfit_style"] == 5


def test_favorite_bonus():
    cand = Candidate(user_perfume_id="u1", perfume=_profile(), is_favorite=True)
    assert score(_ctx(), cand, now=NOW, rng=NO_JITTER) == 85


def test_rank_empty_collection():
    assert rank(_ctx(), [], now=NOW, rng=NO_JITTER) is None


def test_rank_skips_orphans():
    orphan = Candidate(user_perfume_id="gone", perfume=None)
    assert rank(_ctx(), [orphan], now=NOW, rng=NO_JITTER) is None

    good = Candidate(user_perfume_id="u2", perfume=_profile())
    best = rank(_ctx(), [orphan, good], now=NOW, rng=NO_JITTER)
    assert best is not None
    assert best.candidate.user_perfume_id == "u2"


def test_score_breakdown_rejects_orphan():
    with pytest.raises(ValueError):
        score_breakdown(_ctx(), Candidate(user_perfume_id="gone", perfume=None), now=NOW)


def test_rank_picks_highest_and_is_idempotent():
    worn = Candidate(user_perfume_id="worn", perfume=_profile(), last_worn_at=NOW - timedelta(hours=3))
    fresh = Candidate(
        user_perfume_id="fresh",
        perfume=_profile(perfume_id="p2", name="Bergamote 22", scent_family="fresh", moods=("playful",)),
    )
    first = rank_all(_ctx(), [worn, fresh], now=NOW, rng=random.Random(1))
    second = rank_all(_ctx(), [worn, fresh], now=NOW, rng=random.Random(1))
    assert [r.candidate.user_perfume_id for r in first] == ["fresh", "worn"]
    assert [r.score for r in first] == [r.score for r in second]


def test_ties_keep_input_order():
    a = Candidate(user_perfume_id="a", perfume=_profile())
    b = Candidate(user_perfume_id="b", perfume=_profile(perfume_id="p2"))
    best = rank(_ctx(), [a, b], now=NOW, rng=NO_JITTER)
    assert best.candidate.user_perfume_id == "a"


def test_ranked_orphan_has_no_perfume():
    ranked = RankedRecommendation(
        candidate=Candidate(user_perfume_id="gone", perfume=None), score=0.0, breakdown=ScoreBreakdown()
    )
    with pytest.raises(ValueError):
        ranked.perfume
