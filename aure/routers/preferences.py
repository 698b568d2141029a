from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aure.auth.deps import get_current_user_id
from aure.core.db import get_session
from aure.models.models import UserPreferences
from aure.routers.helpers import preferences_out
from aure.schemas.preferences import PreferencesIn, PreferencesOut

router = APIRouter(prefix="/preferences", tags=["preferences"])


async def _load(session: AsyncSession, user_id: str) -> Optional[UserPreferences]:
    res = await session.execute(select(UserPreferences).where(UserPreferences.user_id == user_id))
    return res.scalar_one_or_none()


async def _get_or_create(session: AsyncSession, user_id: str) -> UserPreferences:
    prefs = await _load(session, user_id)
    if prefs:
        return prefs
    prefs = UserPreferences(user_id=user_id, use_weather_context=True)
    try:
        async with session.begin_nested():
            session.add(prefs)
    except IntegrityError:
        prefs = await _load(session, user_id)
        if prefs is None:
            raise
    return prefs


@router.get("", response_model=Optional[PreferencesOut])
async def read_preferences(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    prefs = await _load(session, user_id)
    return preferences_out(prefs) if prefs else None


@router.put("", response_model=PreferencesOut)
async def upsert_preferences(
    payload: PreferencesIn,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    prefs = await _get_or_create(session, user_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "use_weather_context" and value is None:
            continue
        setattr(prefs, field, value)
    prefs.updated_at = datetime.now(timezone.utc)
    await session.commit()
    return preferences_out(prefs)


@router.post("/weather-context/toggle", response_model=PreferencesOut)
async def toggle_weather_context(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    prefs = await _get_or_create(session, user_id)
    prefs.use_weather_context = not prefs.use_weather_context
    prefs.updated_at = datetime.now(timezone.utc)
    await session.commit()
    return preferences_out(prefs)
