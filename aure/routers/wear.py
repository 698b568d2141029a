import logging
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aure.auth.deps import get_current_user_id
from aure.core.db import get_session
from aure.models.models import Perfume, UserPerfume, WearLog
from aure.recs.wear_stats import summarize
from aure.routers.helpers import local_today, local_tz, wear_out
from aure.schemas.wear import WearLogIn, WearLogOut, WearStatsOut

router = APIRouter(prefix="/wear-log", tags=["wear"])
logger = logging.getLogger("uvicorn.error")


def _as_uuid(value: str | None, detail: str) -> uuid.UUID | None:
    if value is None:
        return None
    try:
        return uuid.UUID(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=detail) from e


def _utc(ts: datetime) -> datetime:
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts.astimezone(timezone.utc)


@router.post("", response_model=WearLogOut)
async def log_wear(
    payload: WearLogIn,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    perfume_id = _as_uuid(payload.perfume_id, "invalid_perfume_id")
    p = await session.get(Perfume, perfume_id)
    if not p:
        raise HTTPException(status_code=404, detail="perfume_not_found")
    worn_at = _utc(payload.worn_at) if payload.worn_at else datetime.now(timezone.utc)

    entry = WearLog(
        user_id=user_id,
        perfume_id=p.id,
        perfume_name=p.name,
        perfume_house=p.house,
        scent_family=p.scent_family,
        session_id=_as_uuid(payload.session_id, "invalid_session_id"),
        vibe_id=_as_uuid(payload.vibe_id, "invalid_vibe_id"),
        notes=payload.notes,
        worn_at=worn_at,
    )
    session.add(entry)

    res = await session.execute(
        select(UserPerfume).where(UserPerfume.user_id == user_id, UserPerfume.perfume_id == p.id)
    )
    owned = res.scalar_one_or_none()
    if owned:
        owned.wear_count = (owned.wear_count or 0) + 1
        if owned.last_worn_at is None or _utc(owned.last_worn_at) < worn_at:
            owned.last_worn_at = worn_at
    await session.commit()
    logger.info("wear: logged perfume=%s user=%s owned=%s", p.name, user_id, bool(owned))
    return wear_out(entry)


@router.get("", response_model=List[WearLogOut])
async def list_wear(
    limit: int = Query(50, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(
        select(WearLog).where(WearLog.user_id == user_id).order_by(WearLog.worn_at.desc()).limit(limit)
    )
    return [wear_out(w) for w in res.scalars().all()]


@router.get("/stats", response_model=WearStatsOut)
async def wear_stats(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(
        select(WearLog).where(WearLog.user_id == user_id).order_by(WearLog.worn_at.asc())
    )
    entries = res.scalars().all()
    stats = summarize(entries, today=local_today(), tz=local_tz())
    return WearStatsOut.model_validate(asdict(stats))
