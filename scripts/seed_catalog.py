from __future__ import annotations

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from aure.core.config import settings
from aure.models.models import Perfume


def _p(name, house, family, performance, top, heart, base, aura, styles, occasions, moods, temps, humidity, description, secondary=None):
    return {
        "name": name,
        "house": house,
        "scent_family": family,
        "secondary_scent_family": secondary,
        "performance": performance,
        "notes": {"top": top, "heart": heart, "base": base},
        "aura_words": aura,
        "outfit_styles": styles,
        "occasions": occasions,
        "moods": moods,
        "weather_performance": {"ideal_temperature": temps, "ideal_humidity": humidity},
        "description": description,
    }


SAMPLE_PERFUMES = [
    _p("Santal 33", "Le Labo", "woody", "balanced",
       ["cardamom", "iris", "violet"], ["ambrox", "Australian sandalwood"], ["cedarwood", "leather", "musk"],
       ["Grounded", "Confident", "Warm"], ["minimalist", "clean", "corporate"], ["work", "casual", "date"],
       ["confident", "mysterious"], ["mild", "cool"], ["dry", "moderate"],
       "A unisex icon with creamy sandalwood and smoky leather."),
    _p("Blanche", "Byredo", "fresh", "office-safe",
       ["pink pepper", "aldehyde"], ["peony", "violet", "rose"], ["blonde woods", "sandalwood", "musk"],
       ["Pure", "Serene", "Ethereal"], ["clean", "minimalist", "romantic"], ["work", "casual"],
       ["soft", "confident"], ["mild", "warm"], ["moderate"],
       "Crisp white linens and delicate florals in perfect harmony."),
    _p("Baccarat Rouge 540", "Maison Francis Kurkdjian", "amber", "loud",
       ["saffron", "jasmine"], ["amberwood", "ambergris"], ["fir resin", "cedar"],
       ["Magnetic", "Bold", "Luminous"], ["glam", "romantic"], ["date", "event"],
       ["confident", "mysterious"], ["cool", "cold"], ["dry"],
       "A modern classic with glowing amber and crystalline woods."),
    _p("Mojave Ghost", "Byredo", "floral", "balanced",
       ["ambrette", "Jamaican nesberry"], ["violet", "sandalwood", "magnolia"], ["cedarwood", "musk", "amber"],
       ["Dreamy", "Soft", "Captivating"], ["romantic", "cozy", "minimalist"], ["casual", "date"],
       ["soft", "playful"], ["warm", "mild"], ["dry", "moderate"],
       "A ghostly floral inspired by the Mojave Desert."),
    _p("Tobacco Vanille", "Tom Ford", "gourmand", "loud",
       ["tobacco leaf", "spicy notes"], ["vanilla", "cacao", "tonka bean"], ["dried fruits", "wood sap"],
       ["Opulent", "Warm", "Indulgent"], ["glam", "cozy"], ["event", "date", "home"],
       ["confident", "mysterious"], ["cold", "cool"], ["dry"],
       "Rich tobacco and creamy vanilla for cold nights."),
    _p("Another 13", "Le Labo", "musky", "office-safe",
       ["pear accord"], ["ambroxan", "moss", "musk"], ["jasmine petals", "ambrette seeds"],
       ["Clean", "Modern", "Magnetic"], ["minimalist", "clean", "streetwear"], ["work", "casual"],
       ["confident", "playful"], ["hot", "warm"], ["humid", "moderate"],
       "A skin scent that makes you smell like the best version of you."),
    _p("Portrait of a Lady", "Frédéric Malle", "floral", "loud",
       ["Turkish rose", "raspberry"], ["patchouli", "incense", "clove"], ["sandalwood", "musk", "amber"],
       ["Regal", "Powerful", "Unforgettable"], ["glam", "corporate", "romantic"], ["event", "work", "date"],
       ["confident", "mysterious"], ["cool", "cold"], ["dry", "moderate"],
       "A commanding rose with serious patchouli depth.", secondary="woody"),
    _p("Bergamote 22", "Le Labo", "fresh", "office-safe",
       ["bergamot", "grapefruit", "orange blossom"], ["petitgrain", "vetiver"], ["cedarwood", "musk", "amber"],
       ["Bright", "Refreshing", "Effortless"], ["clean", "minimalist", "streetwear"], ["work", "casual"],
       ["playful", "soft"], ["hot", "warm", "mild"], ["humid", "moderate"],
       "Sunlit citrus for everyday elegance."),
]


async def seed(session: AsyncSession) -> int:
    """Insert the sample catalog when it is empty; returns the number of rows added."""
    existing = (await session.execute(select(Perfume.id).limit(1))).first()
    if existing:
        print("catalog already seeded")
        return 0
    for data in SAMPLE_PERFUMES:
        session.add(Perfume(**data))
    await session.commit()
    print(f"seeded {len(SAMPLE_PERFUMES)} perfumes")
    return len(SAMPLE_PERFUMES)


async def _run() -> None:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    Session = async_sessionmaker(engine, expire_on_commit=False)
    async with Session() as session:
        await seed(session)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(_run())
