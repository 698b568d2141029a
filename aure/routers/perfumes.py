import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aure.auth.deps import get_current_user_id
from aure.core.db import get_session
from aure.models.models import Perfume
from aure.routers.helpers import perfume_out
from aure.schemas.perfumes import PerfumeCreate, PerfumeOut, PerformanceIn, ScentFamilyIn

router = APIRouter(prefix="/perfumes", tags=["perfumes"])
logger = logging.getLogger("uvicorn.error")

SEARCH_LIMIT = 10


@router.get("", response_model=List[PerfumeOut])
async def list_perfumes(
    limit: int = Query(200, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
):
    res = await session.execute(select(Perfume).order_by(Perfume.house.asc(), Perfume.name.asc()).limit(limit))
    return [perfume_out(p) for p in res.scalars().all()]


@router.get("/search", response_model=List[PerfumeOut])
async def search_perfumes(
    q: str = Query("", max_length=100),
    session: AsyncSession = Depends(get_session),
):
    term = q.strip().lower()
    if not term:
        return []
    pattern = f"%{term}%"
    res = await session.execute(
        select(Perfume)
        .where(or_(func.lower(Perfume.name).like(pattern), func.lower(Perfume.house).like(pattern)))
        .order_by(Perfume.name.asc())
        .limit(SEARCH_LIMIT)
    )
    return [perfume_out(p) for p in res.scalars().all()]


@router.get("/by-family/{family}", response_model=List[PerfumeOut])
async def perfumes_by_family(family: ScentFamilyIn, session: AsyncSession = Depends(get_session)):
    res = await session.execute(select(Perfume).where(Perfume.scent_family == family).order_by(Perfume.name.asc()))
    return [perfume_out(p) for p in res.scalars().all()]


@router.get("/by-performance/{tier}", response_model=List[PerfumeOut])
async def perfumes_by_performance(tier: PerformanceIn, session: AsyncSession = Depends(get_session)):
    res = await session.execute(select(Perfume).where(Perfume.performance == tier).order_by(Perfume.name.asc()))
    return [perfume_out(p) for p in res.scalars().all()]


@router.get("/{perfume_id}", response_model=PerfumeOut)
async def get_perfume(perfume_id: UUID, session: AsyncSession = Depends(get_session)):
    p = await session.get(Perfume, perfume_id)
    if not p:
        raise HTTPException(status_code=404, detail="perfume_not_found")
    return perfume_out(p)


@router.post("", response_model=PerfumeOut)
async def create_perfume(
    payload: PerfumeCreate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    data = payload.model_dump()
    p = Perfume(
        name=data["name"].strip(),
        house=data["house"].strip(),
        scent_family=data["scent_family"],
        secondary_scent_family=data["secondary_scent_family"],
        performance=data["performance"],
        notes=data["notes"],
        aura_words=data["aura_words"],
        outfit_styles=data["outfit_styles"],
        occasions=data["occasions"],
        moods=data["moods"],
        weather_performance=data["weather_performance"],
        description=data["description"],
        image_url=data["image_url"],
    )
    session.add(p)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise HTTPException(status_code=409, detail="perfume_exists") from e
    logger.info("perfumes: created %s / %s by=%s", p.name, p.house, user_id)
    return perfume_out(p)
