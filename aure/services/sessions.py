"""Create a scent session and attach the recommendation outcome.

The session row is written first with the requested context; the outcome fields are patched
in one go once scoring and copy generation finish. An empty (or fully orphaned) collection
leaves the session pending with no outcome.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aure.models.models import Perfume, ScentSession, UserPerfume
from aure.recs.buckets import categorize_humidity, categorize_temperature
from aure.recs.classify import classify
from aure.recs.scorer import JitterSource, rank
from aure.recs.types import Candidate, PerfumeProfile, ScoringContext
from aure.schemas.sessions import SessionCreate
from aure.services import llm as llm_service
from aure.services.llm.types import EditorialInput

logger = logging.getLogger("uvicorn.error")


def profile_from_perfume(p: Perfume) -> PerfumeProfile:
    wp = p.weather_performance or {}
    boost = wp.get("temperature_boost")
    return PerfumeProfile(
        perfume_id=str(p.id),
        name=p.name,
        house=p.house,
        scent_family=p.scent_family,
        secondary_family=p.secondary_scent_family,
        moods=tuple(p.moods or ()),
        occasions=tuple(p.occasions or ()),
        outfit_styles=tuple(p.outfit_styles or ()),
        ideal_temperature=tuple(wp.get("ideal_temperature") or ()),
        temperature_boost=float(boost) if boost is not None else None,
        aura_words=tuple(p.aura_words or ()),
    )


async def load_catalog(session: AsyncSession, perfume_ids: Sequence[uuid.UUID]) -> Dict[uuid.UUID, Perfume]:
    if not perfume_ids:
        return {}
    res = await session.execute(select(Perfume).where(Perfume.id.in_(set(perfume_ids))))
    return {p.id: p for p in res.scalars().all()}


async def load_candidates(session: AsyncSession, user_id: str) -> List[Candidate]:
    res = await session.execute(
        select(UserPerfume).where(UserPerfume.user_id == user_id).order_by(UserPerfume.created_at.asc())
    )
    owned = res.scalars().all()
    catalog = await load_catalog(session, [up.perfume_id for up in owned])
    out: List[Candidate] = []
    for up in owned:
        p = catalog.get(up.perfume_id)
        out.append(
            Candidate(
                user_perfume_id=str(up.id),
                perfume=profile_from_perfume(p) if p else None,
                is_favorite=bool(up.is_favorite),
                last_worn_at=up.last_worn_at,
            )
        )
    return out


def weather_snapshot(payload: SessionCreate) -> Optional[dict]:
    """Weather as stored on the session, with buckets derived from raw readings when absent."""
    if payload.weather is None:
        return None
    w = payload.weather.model_dump()
    if w.get("temperature_category") is None and w.get("temperature") is not None:
        w["temperature_category"] = categorize_temperature(w["temperature"])
    if w.get("humidity_category") is None and w.get("humidity") is not None:
        w["humidity_category"] = categorize_humidity(w["humidity"])
    return w


async def create_session_with_recommendation(
    session: AsyncSession,
    user_id: str,
    payload: SessionCreate,
    *,
    rng: Optional[JitterSource] = None,
    now: Optional[datetime] = None,
) -> ScentSession:
    now = now or datetime.now(timezone.utc)
    weather = weather_snapshot(payload)
    row = ScentSession(
        user_id=user_id,
        outfit_styles=list(payload.outfit_styles),
        mood=payload.mood,
        scent_directions=list(payload.scent_directions),
        occasion=payload.occasion,
        weather=weather,
        created_at=now,
    )
    session.add(row)
    await session.commit()
    logger.info("sessions: created id=%s user=%s", row.id, user_id)

    candidates = await load_candidates(session, user_id)
    context = ScoringContext(
        scent_directions=frozenset(payload.scent_directions),
        mood=payload.mood,
        occasion=payload.occasion,
        outfit_styles=tuple(payload.outfit_styles),
        weather_bucket=(weather or {}).get("temperature_category"),
    )
    best = rank(context, candidates, now=now, rng=rng)
    if best is None:
        logger.info("sessions: no candidates id=%s owned=%d, leaving pending", row.id, len(candidates))
        return row

    match = round(best.score, 2)
    label = classify(match)
    perfume = best.perfume
    copy, source = await llm_service.editorial_copy(
        EditorialInput(
            perfume_name=perfume.name,
            house=perfume.house,
            scent_family=perfume.scent_family,
            mood=payload.mood,
            occasion=payload.occasion,
            weather_bucket=context.weather_bucket,
            aura_words=list(perfume.aura_words),
        )
    )

    row.recommended_user_perfume_id = uuid.UUID(best.candidate.user_perfume_id)
    row.recommendation_type = label
    row.match_score = match
    row.editorial_explanation = copy.explanation
    row.affirmation = copy.affirmation
    row.copy_source = source
    row.completed_at = datetime.now(timezone.utc)
    await session.commit()
    logger.info(
        "sessions: completed id=%s perfume=%s score=%.2f type=%s copy=%s",
        row.id,
        perfume.name,
        match,
        label,
        source,
    )
    return row
