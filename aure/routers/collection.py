import logging
import uuid
from datetime import datetime, timezone
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aure.auth.deps import get_current_user_id
from aure.core.db import get_session
from aure.models.models import Perfume, UserPerfume
from aure.routers.helpers import user_perfume_out
from aure.schemas.collection import CollectionAdd, CollectionAddByName, CollectionUpdate, UserPerfumeOut
from aure.services.catalog import get_or_create_perfume
from aure.services.sessions import load_catalog

router = APIRouter(prefix="/collection", tags=["collection"])
logger = logging.getLogger("uvicorn.error")

DUPLICATE_DETAIL = {"code": "already_in_collection", "message": "This fragrance is already in your collection"}


async def _owned(session: AsyncSession, user_id: str, user_perfume_id: UUID) -> UserPerfume:
    up = await session.get(UserPerfume, user_perfume_id)
    if not up or up.user_id != user_id:
        raise HTTPException(status_code=404, detail="not_found")
    return up


async def _with_catalog(session: AsyncSession, rows: List[UserPerfume]) -> List[UserPerfumeOut]:
    catalog = await load_catalog(session, [up.perfume_id for up in rows])
    out = []
    for up in rows:
        p = catalog.get(up.perfume_id)
        if p is None:
            logger.warning("collection: catalog row missing user_perfume=%s perfume=%s", up.id, up.perfume_id)
        out.append(user_perfume_out(up, p))
    return out


async def _already_owned(session: AsyncSession, user_id: str, perfume_id: uuid.UUID) -> bool:
    res = await session.execute(
        select(UserPerfume.id).where(UserPerfume.user_id == user_id, UserPerfume.perfume_id == perfume_id)
    )
    return res.first() is not None


async def _insert(session: AsyncSession, up: UserPerfume) -> None:
    session.add(up)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL) from e


@router.get("", response_model=List[UserPerfumeOut])
async def list_collection(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(
        select(UserPerfume).where(UserPerfume.user_id == user_id).order_by(UserPerfume.created_at.desc())
    )
    return await _with_catalog(session, list(res.scalars().all()))


@router.get("/favorites", response_model=List[UserPerfumeOut])
async def list_favorites(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(
        select(UserPerfume)
        .where(UserPerfume.user_id == user_id, UserPerfume.is_favorite.is_(True))
        .order_by(UserPerfume.created_at.desc())
    )
    return await _with_catalog(session, list(res.scalars().all()))


@router.get("/{user_perfume_id}", response_model=UserPerfumeOut)
async def get_collection_entry(
    user_perfume_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    up = await _owned(session, user_id, user_perfume_id)
    p = await session.get(Perfume, up.perfume_id)
    return user_perfume_out(up, p)


@router.post("", response_model=UserPerfumeOut)
async def add_to_collection(
    payload: CollectionAdd,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    try:
        perfume_id = uuid.UUID(payload.perfume_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail="perfume_not_found") from e
    p = await session.get(Perfume, perfume_id)
    if not p:
        raise HTTPException(status_code=404, detail="perfume_not_found")
    if await _already_owned(session, user_id, perfume_id):
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)

    up = UserPerfume(
        user_id=user_id,
        perfume_id=perfume_id,
        nickname=payload.nickname,
        personal_notes=payload.personal_notes,
        disliked_notes=[],
        is_favorite=False,
        wear_count=0,
    )
    await _insert(session, up)
    logger.info("collection: added perfume=%s user=%s", perfume_id, user_id)
    return user_perfume_out(up, p)


@router.post("/add", response_model=UserPerfumeOut)
async def add_by_name(
    payload: CollectionAddByName,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    p = await get_or_create_perfume(
        session,
        payload.name,
        payload.house,
        family=payload.family,
        image_url=payload.image_url,
        moods=payload.moods,
    )
    if await _already_owned(session, user_id, p.id):
        # keep a freshly created catalog row even when the add itself is refused
        await session.commit()
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)

    up = UserPerfume(
        user_id=user_id,
        perfume_id=p.id,
        personal_notes=payload.personal_notes,
        disliked_notes=[],
        is_favorite=False,
        wear_count=0,
    )
    await _insert(session, up)
    logger.info("collection: added by name %s / %s user=%s", p.name, p.house, user_id)
    return user_perfume_out(up, p)


@router.patch("/{user_perfume_id}", response_model=UserPerfumeOut)
async def update_collection_entry(
    user_perfume_id: UUID,
    payload: CollectionUpdate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    up = await _owned(session, user_id, user_perfume_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "disliked_notes" and value is None:
            value = []
        setattr(up, field, value)
    await session.commit()
    p = await session.get(Perfume, up.perfume_id)
    return user_perfume_out(up, p)


@router.post("/{user_perfume_id}/favorite", response_model=UserPerfumeOut)
async def toggle_favorite(
    user_perfume_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    up = await _owned(session, user_id, user_perfume_id)
    up.is_favorite = not up.is_favorite
    await session.commit()
    p = await session.get(Perfume, up.perfume_id)
    return user_perfume_out(up, p)


@router.post("/{user_perfume_id}/worn", response_model=UserPerfumeOut)
async def mark_worn(
    user_perfume_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    up = await _owned(session, user_id, user_perfume_id)
    up.wear_count = (up.wear_count or 0) + 1
    up.last_worn_at = datetime.now(timezone.utc)
    await session.commit()
    p = await session.get(Perfume, up.perfume_id)
    return user_perfume_out(up, p)


@router.delete("/{user_perfume_id}")
async def remove_from_collection(
    user_perfume_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    up = await _owned(session, user_id, user_perfume_id)
    await session.delete(up)
    await session.commit()
    logger.info("collection: removed %s user=%s", user_perfume_id, user_id)
    return {"ok": True}
