import logging
from typing import List, Optional
from uuid import UUID

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aure.auth.deps import get_current_user_id
from aure.core.config import settings
from aure.core.db import get_session
from aure.models.models import Perfume, ScentSession, UserPerfume, Vibe
from aure.recs.editorial import aura_words
from aure.routers.helpers import vibe_out
from aure.schemas.vibes import VibeCreate, VibeImageUploadIn, VibeImageUploadOut, VibeOut
from aure.storage import r2
from aure.storage.keys import ext_from_content_type, vibe_image_key

router = APIRouter(prefix="/vibes", tags=["vibes"])
uploads_router = APIRouter(prefix="/uploads", tags=["uploads"])
logger = logging.getLogger("uvicorn.error")

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/heic"}


def _outfit_image_url(v: Vibe) -> Optional[str]:
    if not (v.has_image and v.outfit_image_key):
        return None
    try:
        return r2.presign_get(v.outfit_image_key, expires=settings.VIBE_IMAGE_URL_TTL_S)
    except (BotoCoreError, ClientError) as e:
        logger.warning("vibes: presign failed vibe=%s reason=%s", v.id, e)
        return None


async def _recommended_perfume(session: AsyncSession, s: ScentSession) -> Optional[Perfume]:
    if not s.recommended_user_perfume_id:
        return None
    up = await session.get(UserPerfume, s.recommended_user_perfume_id)
    if not up:
        return None
    return await session.get(Perfume, up.perfume_id)


async def _perfume_image_url(session: AsyncSession, v: Vibe) -> Optional[str]:
    s = await session.get(ScentSession, v.session_id)
    if not s:
        return None
    p = await _recommended_perfume(session, s)
    return p.image_url if p else None


@router.post("", response_model=VibeOut)
async def create_vibe(
    payload: VibeCreate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    try:
        session_id = UUID(payload.session_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail="session_not_found") from e
    s = await session.get(ScentSession, session_id)
    if not s or s.user_id != user_id:
        raise HTTPException(status_code=404, detail="session_not_found")
    if s.completed_at is None or s.recommended_user_perfume_id is None:
        raise HTTPException(status_code=400, detail="session_incomplete")
    p = await _recommended_perfume(session, s)
    if p is None:
        raise HTTPException(status_code=400, detail="recommendation_unavailable")
    if payload.outfit_image_key and not r2.key_owned_by(user_id, payload.outfit_image_key):
        raise HTTPException(status_code=400, detail="invalid_image_key")

    v = Vibe(
        user_id=user_id,
        session_id=s.id,
        name=payload.name.strip(),
        notes=payload.notes,
        has_image=bool(payload.outfit_image_key),
        outfit_image_key=payload.outfit_image_key,
        perfume_name=p.name,
        perfume_house=p.house,
        scent_family=p.scent_family,
        aura_words=aura_words(p.aura_words or [], s.mood),
        mood=s.mood,
        occasion=s.occasion,
    )
    session.add(v)
    await session.commit()
    logger.info("vibes: saved %s session=%s user=%s", v.id, s.id, user_id)
    return vibe_out(v, _outfit_image_url(v), p.image_url)


@router.get("", response_model=List[VibeOut])
async def list_vibes(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(select(Vibe).where(Vibe.user_id == user_id).order_by(Vibe.created_at.desc()))
    return [vibe_out(v, _outfit_image_url(v)) for v in res.scalars().all()]


@router.get("/ids", response_model=List[str])
async def list_vibe_ids(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(select(Vibe.id).where(Vibe.user_id == user_id).order_by(Vibe.created_at.desc()))
    return [str(row[0]) for row in res.all()]


@router.get("/{vibe_id}", response_model=VibeOut)
async def get_vibe(
    vibe_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    v = await session.get(Vibe, vibe_id)
    if not v or v.user_id != user_id:
        raise HTTPException(status_code=404, detail="not_found")
    return vibe_out(v, _outfit_image_url(v), await _perfume_image_url(session, v))


@router.delete("/{vibe_id}")
async def delete_vibe(
    vibe_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    v = await session.get(Vibe, vibe_id)
    if not v:
        raise HTTPException(status_code=404, detail="not_found")
    if v.user_id != user_id:
        raise HTTPException(status_code=403, detail="forbidden")
    key = v.outfit_image_key if v.has_image else None
    await session.delete(v)
    await session.commit()
    if key:
        r2.delete_object(key)
    logger.info("vibes: deleted %s user=%s", vibe_id, user_id)
    return {"ok": True}


@uploads_router.post("/vibe-image", response_model=VibeImageUploadOut)
async def presign_vibe_image(
    payload: VibeImageUploadIn,
    user_id: str = Depends(get_current_user_id),
):
    content_type = (payload.content_type or "").lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail="unsupported_content_type")
    key = vibe_image_key(user_id, ext_from_content_type(content_type))
    try:
        url, headers = r2.presign_put(key, content_type, expires=settings.VIBE_IMAGE_URL_TTL_S)
    except (BotoCoreError, ClientError) as e:
        logger.warning("uploads: presign failed user=%s reason=%s", user_id, e)
        raise HTTPException(status_code=503, detail="storage_unavailable") from e
    return VibeImageUploadOut(key=key, upload_url=url, headers=headers, expires_in=settings.VIBE_IMAGE_URL_TTL_S)
