import httpx
import pytest
from sqlalchemy import select

from aure.models.models import Perfume
from aure.services.catalog import get_or_create_perfume
from scripts.seed_catalog import SAMPLE_PERFUMES, seed
from tests.factories import make_perfume


@pytest.mark.asyncio
async def test_taxonomy(client: httpx.AsyncClient):
    body = (await client.get("/v1/taxonomy")).json()
    assert body["scent_families"] == ["fresh", "floral", "woody", "amber", "gourmand", "musky"]
    assert len(body["analysis_moods"]) == 11
    assert body["weather_scent_recommendations"]["hot"]["recommended"] == ["fresh", "musky"]


@pytest.mark.asyncio
async def test_seed_is_idempotent(db):
    assert await seed(db) == len(SAMPLE_PERFUMES)
    assert await seed(db) == 0


@pytest.mark.asyncio
async def test_catalog_reads(client: httpx.AsyncClient, db):
    await seed(db)

    everything = (await client.get("/v1/perfumes")).json()
    assert len(everything) == len(SAMPLE_PERFUMES)

    found = (await client.get("/v1/perfumes/search", params={"q": "le labo"})).json()
    assert sorted(p["name"] for p in found) == ["Another 13", "Bergamote 22", "Santal 33"]
    assert (await client.get("/v1/perfumes/search", params={"q": " "})).json() == []

    florals = (await client.get("/v1/perfumes/by-family/floral")).json()
    assert {p["name"] for p in florals} == {"Mojave Ghost", "Portrait of a Lady"}
    assert (await client.get("/v1/perfumes/by-family/aquatic")).status_code == 422

    loud = (await client.get("/v1/perfumes/by-performance/loud")).json()
    assert {p["name"] for p in loud} == {"Baccarat Rouge 540", "Tobacco Vanille", "Portrait of a Lady"}

    lady = next(p for p in florals if p["name"] == "Portrait of a Lady")
    one = (await client.get(f"/v1/perfumes/{lady['id']}")).json()
    assert one["secondary_scent_family"] == "woody"
    assert one["notes"]["top"] == ["Turkish rose", "raspberry"]
    missing = await client.get("/v1/perfumes/00000000-0000-0000-0000-000000000000")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_create_perfume_conflict(client: httpx.AsyncClient):
    payload = {
        "name": "Philosykos",
        "house": "Diptyque",
        "scent_family": "fresh",
        "secondary_scent_family": "woody",
        "weather_performance": {"ideal_temperature": ["warm"], "temperature_boost": 1.0},
    }
    created = await client.post("/v1/perfumes", json=payload)
    assert created.status_code == 200
    assert created.json()["weather_performance"]["temperature_boost"] == 1.0
    dup = await client.post("/v1/perfumes", json=payload)
    assert dup.status_code == 409
    assert dup.json()["detail"] == "perfume_exists"


@pytest.mark.asyncio
async def test_get_or_create_reuses_existing(db):
    existing = await make_perfume(db)
    again = await get_or_create_perfume(db, " Santal 33 ", "Le Labo", family="fresh")
    assert again.id == existing.id
    assert again.scent_family == "woody"

    fresh = await get_or_create_perfume(db, "Eau Sauvage", "Dior", family="citrus", moods=["playful"])
    await db.commit()
    assert fresh.scent_family == "woody"
    assert fresh.moods == ["playful"]
    assert fresh.performance == "balanced"
    assert await db.get(Perfume, fresh.id) is not None


@pytest.mark.asyncio
async def test_get_or_create_recovers_from_concurrent_insert(db, session_factory, monkeypatch):
    from aure.services import catalog

    real_find = catalog.find_perfume
    calls = {"n": 0}

    async def racing_find(session, name, house):
        calls["n"] += 1
        if calls["n"] == 1:
            # another request commits the same perfume after our lookup
            async with session_factory() as other:
                await make_perfume(other, name=name, house=house)
            return None
        return await real_find(session, name, house)

    monkeypatch.setattr(catalog, "find_perfume", racing_find)
    got = await catalog.get_or_create_perfume(db, "Santal 33", "Le Labo", family="woody")
    await db.commit()

    rows = (await db.execute(select(Perfume).where(Perfume.name == "Santal 33"))).scalars().all()
    assert len(rows) == 1
    assert got.id == rows[0].id
    assert calls["n"] == 2
