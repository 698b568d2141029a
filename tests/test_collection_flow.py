import uuid

import httpx
import pytest
from sqlalchemy import select

from aure.models.models import Perfume, UserPerfume
from tests.factories import as_user, make_perfume


@pytest.mark.asyncio
async def test_add_list_and_duplicate(client: httpx.AsyncClient, db):
    p = await make_perfume(db)

    resp = await client.post("/v1/collection", json={"perfume_id": str(p.id), "nickname": "S33"})
    assert resp.status_code == 200
    entry = resp.json()
    assert entry["perfume"]["name"] == "Santal 33"
    assert entry["wear_count"] == 0
    assert entry["is_favorite"] is False

    dup = await client.post("/v1/collection", json={"perfume_id": str(p.id)})
    assert dup.status_code == 409
    assert dup.json()["detail"]["code"] == "already_in_collection"
    assert dup.json()["detail"]["message"] == "This fragrance is already in your collection"

    listing = await client.get("/v1/collection")
    assert listing.status_code == 200
    assert len(listing.json()) == 1

    one = await client.get(f"/v1/collection/{entry['id']}")
    assert one.status_code == 200
    assert one.json()["nickname"] == "S33"


@pytest.mark.asyncio
async def test_add_missing_catalog_row(client: httpx.AsyncClient):
    resp = await client.post("/v1/collection", json={"perfume_id": str(uuid.uuid4())})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_add_by_name_creates_catalog_row_once(client: httpx.AsyncClient, db):
    resp = await client.post(
        "/v1/collection/add",
        json={"name": "Gypsy Water", "house": "Byredo", "family": "Woody Aromatic"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["perfume"]["scent_family"] == "woody"
    assert body["perfume"]["aura_words"] == ["Grounded", "Sophisticated", "Timeless"]
    assert body["perfume"]["weather_performance"]["ideal_temperature"] == ["mild", "cool", "cold"]

    again = await client.post("/v1/collection/add", json={"name": "Gypsy Water", "house": "Byredo"})
    assert again.status_code == 409

    # another user reuses the same catalog row
    as_user("someone-else")
    other = await client.post(
        "/v1/collection/add",
        json={"name": "Gypsy Water", "house": "Byredo", "family": "fresh", "moods": ["soft", "nonsense"]},
    )
    assert other.status_code == 200
    assert other.json()["perfume_id"] == body["perfume_id"]

    rows = (await db.execute(select(Perfume).where(Perfume.name == "Gypsy Water"))).scalars().all()
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_add_by_name_keeps_caller_moods(client: httpx.AsyncClient):
    resp = await client.post(
        "/v1/collection/add",
        json={"name": "Bergamote 22", "house": "Le Labo", "family": "Fresh", "moods": ["playful", "loud"]},
    )
    assert resp.status_code == 200
    perfume = resp.json()["perfume"]
    assert perfume["scent_family"] == "fresh"
    assert perfume["moods"] == ["playful", "loud"]
    assert perfume["weather_performance"]["ideal_humidity"] == ["moderate"]

    defaulted = await client.post("/v1/collection/add", json={"name": "Oud Wood", "house": "Tom Ford", "family": "amber"})
    assert defaulted.json()["perfume"]["moods"] == ["confident", "mysterious"]


@pytest.mark.asyncio
async def test_favorite_worn_patch_delete(client: httpx.AsyncClient, db):
    p = await make_perfume(db)
    entry = (await client.post("/v1/collection", json={"perfume_id": str(p.id)})).json()

    fav = await client.post(f"/v1/collection/{entry['id']}/favorite")
    assert fav.json()["is_favorite"] is True
    favorites = await client.get("/v1/collection/favorites")
    assert [e["id"] for e in favorites.json()] == [entry["id"]]
    unfav = await client.post(f"/v1/collection/{entry['id']}/favorite")
    assert unfav.json()["is_favorite"] is False

    worn = await client.post(f"/v1/collection/{entry['id']}/worn")
    assert worn.json()["wear_count"] == 1
    assert worn.json()["last_worn_at"] is not None
    worn = await client.post(f"/v1/collection/{entry['id']}/worn")
    assert worn.json()["wear_count"] == 2

    patched = await client.patch(
        f"/v1/collection/{entry['id']}",
        json={"personal_notes": "Rainy days", "disliked_notes": ["leather"]},
    )
    assert patched.status_code == 200
    assert patched.json()["personal_notes"] == "Rainy days"
    assert patched.json()["disliked_notes"] == ["leather"]

    gone = await client.delete(f"/v1/collection/{entry['id']}")
    assert gone.status_code == 200
    assert (await client.get(f"/v1/collection/{entry['id']}")).status_code == 404
    # the catalog row survives
    assert (await client.get(f"/v1/perfumes/{p.id}")).status_code == 200


@pytest.mark.asyncio
async def test_other_users_entries_are_not_found(client: httpx.AsyncClient, db):
    p = await make_perfume(db)
    entry = (await client.post("/v1/collection", json={"perfume_id": str(p.id)})).json()

    as_user("intruder")
    assert (await client.get(f"/v1/collection/{entry['id']}")).status_code == 404
    assert (await client.post(f"/v1/collection/{entry['id']}/favorite")).status_code == 404
    assert (await client.post(f"/v1/collection/{entry['id']}/worn")).status_code == 404
    assert (await client.delete(f"/v1/collection/{entry['id']}")).status_code == 404
    assert (await client.get("/v1/collection")).json() == []

    row = await db.get(UserPerfume, uuid.UUID(entry["id"]))
    await db.refresh(row)
    assert row.is_favorite is False
    assert row.wear_count == 0


@pytest.mark.asyncio
async def test_orphaned_entry_is_listed_without_perfume(client: httpx.AsyncClient, db):
    db.add(UserPerfume(user_id="test-user", perfume_id=uuid.uuid4(), disliked_notes=[]))
    await db.commit()
    listing = (await client.get("/v1/collection")).json()
    assert len(listing) == 1
    assert listing[0]["perfume"] is None
