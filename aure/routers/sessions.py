import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aure.auth.deps import get_current_user_id
from aure.core.db import get_session
from aure.models.models import ScentSession, UserPerfume
from aure.recs.editorial import affirmation_for, mood_aura_words
from aure.routers.helpers import local_day_bounds_utc, local_today, session_out
from aure.schemas.sessions import SessionCreate, SessionOut
from aure.services.sessions import create_session_with_recommendation, load_catalog

router = APIRouter(prefix="/sessions", tags=["sessions"])
logger = logging.getLogger("uvicorn.error")


async def _views(session: AsyncSession, rows: List[ScentSession]) -> List[SessionOut]:
    ids = {s.recommended_user_perfume_id for s in rows if s.recommended_user_perfume_id}
    owned = {}
    if ids:
        res = await session.execute(select(UserPerfume).where(UserPerfume.id.in_(ids)))
        owned = {up.id: up for up in res.scalars().all()}
    catalog = await load_catalog(session, [up.perfume_id for up in owned.values()])
    out = []
    for s in rows:
        up = owned.get(s.recommended_user_perfume_id) if s.recommended_user_perfume_id else None
        p = catalog.get(up.perfume_id) if up else None
        out.append(session_out(s, up, p))
    return out


@router.post("", response_model=SessionOut)
async def create_session(
    payload: SessionCreate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    row = await create_session_with_recommendation(session, user_id, payload)
    return (await _views(session, [row]))[0]


@router.get("", response_model=List[SessionOut])
async def list_sessions(
    limit: int = Query(10, ge=1, le=100),
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(
        select(ScentSession)
        .where(ScentSession.user_id == user_id)
        .order_by(ScentSession.created_at.desc())
        .limit(limit)
    )
    return await _views(session, list(res.scalars().all()))


@router.get("/today", response_model=Optional[SessionOut])
async def today_session(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    start, end = local_day_bounds_utc(local_today())
    res = await session.execute(
        select(ScentSession)
        .where(
            ScentSession.user_id == user_id,
            ScentSession.created_at >= start,
            ScentSession.created_at < end,
            ScentSession.completed_at.is_not(None),
        )
        .order_by(ScentSession.created_at.desc())
        .limit(1)
    )
    row = res.scalar_one_or_none()
    if row is None:
        return None
    return (await _views(session, [row]))[0]


@router.get("/aura-words")
async def read_aura_words(mood: str = Query(..., min_length=1)):
    return {"mood": mood, "aura_words": mood_aura_words(mood)}


@router.get("/affirmation")
async def read_affirmation(mood: str = Query(..., min_length=1)):
    return {"mood": mood, "affirmation": affirmation_for(mood)}


@router.get("/{session_id}", response_model=SessionOut)
async def get_scent_session(
    session_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    row = await session.get(ScentSession, session_id)
    if not row or row.user_id != user_id:
        raise HTTPException(status_code=404, detail="session_not_found")
    return (await _views(session, [row]))[0]
