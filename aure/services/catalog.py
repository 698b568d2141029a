import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aure.core.taxonomy import family_defaults, normalize_family
from aure.models.models import Perfume

logger = logging.getLogger("uvicorn.error")


async def find_perfume(session: AsyncSession, name: str, house: str) -> Optional[Perfume]:
    res = await session.execute(select(Perfume).where(Perfume.name == name, Perfume.house == house))
    return res.scalar_one_or_none()


async def get_or_create_perfume(
    session: AsyncSession,
    name: str,
    house: str,
    family: Optional[str] = None,
    image_url: Optional[str] = None,
    moods: Optional[List[str]] = None,
) -> Perfume:
    """Catalog row for (name, house), created from family defaults when missing.

    Does not commit; the caller owns the transaction.
    """
    name = name.strip()
    house = house.strip()
    existing = await find_perfume(session, name, house)
    if existing:
        return existing

    fam = normalize_family(family)
    defaults = family_defaults(fam)
    picked_moods = list(moods) if moods is not None else list(defaults["moods"])
    perfume = Perfume(
        name=name,
        house=house,
        scent_family=fam,
        performance="balanced",
        notes={"top": [], "heart": [], "base": []},
        aura_words=list(defaults["aura_words"]),
        outfit_styles=list(defaults["outfit_styles"]),
        occasions=list(defaults["occasions"]),
        moods=picked_moods,
        weather_performance={"ideal_temperature": list(defaults["ideal_temperature"]), "ideal_humidity": ["moderate"]},
        image_url=image_url,
    )
    try:
        async with session.begin_nested():
            session.add(perfume)
    except IntegrityError:
        # another request created it between our read and write
        logger.info("catalog: concurrent create for %s / %s, re-reading", name, house)
        existing = await find_perfume(session, name, house)
        if existing is None:
            raise
        return existing
    logger.info("catalog: created perfume %s / %s family=%s", name, house, fam)
    return perfume
