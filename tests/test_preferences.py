import httpx
import pytest


@pytest.mark.asyncio
async def test_preferences_upsert_and_toggle(client: httpx.AsyncClient):
    assert (await client.get("/v1/preferences")).json() is None

    created = await client.put("/v1/preferences", json={"avoid_notes": ["oud"]})
    assert created.status_code == 200
    body = created.json()
    assert body["avoid_notes"] == ["oud"]
    assert body["use_weather_context"] is True
    assert body["scent_preferences"] is None

    patched = await client.put(
        "/v1/preferences",
        json={"scent_preferences": ["woody"], "default_location": {"city": "London", "country": "UK"}},
    )
    assert patched.json()["id"] == body["id"]
    assert patched.json()["avoid_notes"] == ["oud"]
    assert patched.json()["scent_preferences"] == ["woody"]
    assert patched.json()["default_location"]["city"] == "London"

    toggled = await client.post("/v1/preferences/weather-context/toggle")
    assert toggled.json()["use_weather_context"] is False
    toggled = await client.post("/v1/preferences/weather-context/toggle")
    assert toggled.json()["use_weather_context"] is True

    current = (await client.get("/v1/preferences")).json()
    assert current["id"] == body["id"]


@pytest.mark.asyncio
async def test_toggle_creates_preferences(client: httpx.AsyncClient):
    toggled = await client.post("/v1/preferences/weather-context/toggle")
    assert toggled.status_code == 200
    assert toggled.json()["use_weather_context"] is False
