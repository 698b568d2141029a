import asyncio
import json

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from aure.core.config import settings
from aure.services import llm as llm_service
from aure.services.llm.providers.base import NullProvider
from aure.services.llm.providers.openai import parse_analysis, strip_code_fences, _safe_parse_editorial
from aure.services.llm.types import EditorialInput, EditorialOutput, OutfitAnalysis, OutfitAnalysisInput


def _payload(**kw):
    data = dict(perfume_name="Santal 33", house="Le Labo", scent_family="woody", mood="confident", occasion="work")
    data.update(kw)
    return EditorialInput(**data)


class DummyProvider:
    def __init__(self, explanation="Made for today.", affirmation="Own it."):
        self.calls = 0
        self.explanation = explanation
        self.affirmation = affirmation

    async def generate_editorial(self, payload, *, timeout_ms):
        self.calls += 1
        return EditorialOutput(explanation=self.explanation, affirmation=self.affirmation)

    async def analyze_outfit(self, payload, *, timeout_ms):
        return OutfitAnalysis(style_categories=["glam"], mood_inference="magnetic", scent_directions=["amber"])


@pytest.fixture
def memory_cache(monkeypatch):
    store = {}

    async def get(key):
        return store.get(key)

    async def put(key, data, ttl):
        store[key] = data

    monkeypatch.setattr(llm_service, "cache_json_get", get)
    monkeypatch.setattr(llm_service, "cache_json_set", put)
    return store


@pytest.fixture
def enabled(monkeypatch):
    monkeypatch.setattr(settings, "LLM_ENABLED", True)


@pytest.mark.asyncio
async def test_disabled_uses_template():
    copy, source = await llm_service.editorial_copy(_payload())
    assert source == "template"
    assert "grounding, earthy woods" in copy.explanation
    assert copy.affirmation == "You carry your own warmth today."


@pytest.mark.asyncio
async def test_provider_and_cache(monkeypatch, enabled, memory_cache):
    prov = DummyProvider()
    monkeypatch.setattr(llm_service, "_get_provider", lambda: prov)
    copy1, source1 = await llm_service.editorial_copy(_payload())
    copy2, source2 = await llm_service.editorial_copy(_payload())
    assert (copy1.explanation, copy1.affirmation) == ("Made for today.", "Own it.")
    assert copy2 == copy1
    assert source1 == source2 == "ai"
    assert prov.calls == 1  # cache hit second time
    assert len(memory_cache) == 1


@pytest.mark.asyncio
async def test_partial_output_falls_back(monkeypatch, enabled, memory_cache):
    monkeypatch.setattr(llm_service, "_get_provider", lambda: DummyProvider(affirmation="  "))
    copy, source = await llm_service.editorial_copy(_payload())
    assert source == "template"
    assert copy.affirmation == "You carry your own warmth today."
    assert memory_cache == {}


@pytest.mark.asyncio
async def test_timeout_fallback(monkeypatch, enabled, memory_cache):
    class SlowProvider:
        async def generate_editorial(self, payload, *, timeout_ms):
            await asyncio.sleep(0)
            raise asyncio.TimeoutError()

    monkeypatch.setattr(llm_service, "_get_provider", lambda: SlowProvider())
    copy, source = await llm_service.editorial_copy(_payload(weather_bucket="cold"))
    assert source == "template"
    assert copy.explanation.endswith("providing cozy comfort against the cold.")


@pytest.mark.asyncio
async def test_cache_outage_is_ignored(monkeypatch, enabled):
    async def broken(*args):
        raise RedisConnectionError("redis down")

    monkeypatch.setattr(llm_service, "cache_json_get", broken)
    monkeypatch.setattr(llm_service, "cache_json_set", broken)
    monkeypatch.setattr(llm_service, "_get_provider", lambda: DummyProvider())
    copy, source = await llm_service.editorial_copy(_payload())
    assert source == "ai"
    assert copy.explanation == "Made for today."


@pytest.mark.asyncio
async def test_null_provider():
    prov = NullProvider()
    out = await prov.generate_editorial(_payload(), timeout_ms=10)
    assert out.explanation == ""
    assert await prov.analyze_outfit(OutfitAnalysisInput(description="jeans"), timeout_ms=10) is None


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```{"a": 1}```') == '{"a": 1}'
    assert strip_code_fences(' {"a": 1} ') == '{"a": 1}'


def test_parse_editorial():
    assert _safe_parse_editorial('{"explanation": " Hi. ", "affirmation": "Go."}') == ("Hi.", "Go.")
    assert _safe_parse_editorial("not json") == ("", "")
    assert _safe_parse_editorial('{"explanation": 3}') == ("", "")


def test_parse_analysis_filters_and_defaults():
    raw = """```json
    {"styleCategories": ["Glam", "boho", "cozy", "clean"], "moodInference": "sleepy",
     "colorPalette": ["black", "gold", "red", "white", "cream", "navy"],
     "scentDirections": ["citrus"], "confidence": 1.7}
    ```"""
    a = parse_analysis(raw)
    assert a.style_categories == ["glam", "cozy"]
    assert a.mood_inference == "confident"
    assert a.color_palette == ["black", "gold", "red", "white", "cream"]
    assert a.scent_directions == ["fresh"]
    assert a.description == "Stylish outfit"
    assert a.confidence == 1.0


def test_parse_analysis_happy_path():
    a = parse_analysis(
        '{"styleCategories": ["streetwear"], "moodInference": "creative", "colorPalette": ["olive"],'
        ' "scentDirections": ["woody", "musky", "amber"], "description": "Relaxed layers", "confidence": 0.62}'
    )
    assert a.style_categories == ["streetwear"]
    assert a.mood_inference == "creative"
    assert a.scent_directions == ["woody", "musky"]
    assert a.description == "Relaxed layers"
    assert a.confidence == 0.62


def test_parse_analysis_rejects_garbage():
    assert parse_analysis("I think it's a nice outfit") is None
    assert parse_analysis("[1, 2]") is None


@pytest.mark.asyncio
async def test_analyze_outfit_disabled_and_failing(monkeypatch):
    assert await llm_service.analyze_outfit(OutfitAnalysisInput(description="black suit")) is None

    class Broken:
        async def analyze_outfit(self, payload, *, timeout_ms):
            raise RuntimeError("vision down")

    monkeypatch.setattr(settings, "LLM_ENABLED", True)
    monkeypatch.setattr(llm_service, "_get_provider", lambda: Broken())
    assert await llm_service.analyze_outfit(OutfitAnalysisInput(description="black suit")) is None


@pytest.mark.asyncio
async def test_outfit_endpoint(client, monkeypatch):
    resp = await client.post("/v1/outfit/analyze", json={"description": "linen shirt and loafers"})
    assert resp.status_code == 200
    assert resp.json() == {"analysis": None, "fallback": "manual"}

    monkeypatch.setattr(settings, "LLM_ENABLED", True)
    monkeypatch.setattr(llm_service, "_get_provider", lambda: DummyProvider())
    resp = await client.post("/v1/outfit/analyze", json={"image_url": "https://img.example.com/fit.jpg"})
    body = resp.json()
    assert body["fallback"] is None
    assert body["analysis"]["mood_inference"] == "magnetic"
    assert body["analysis"]["scent_directions"] == ["amber"]

    assert (await client.post("/v1/outfit/analyze", json={})).status_code == 422


@pytest.mark.asyncio
async def test_corrupt_cache_entry_is_skipped(monkeypatch, enabled):
    async def bad_entry(key):
        return {"explanation": ["not", "text"], "affirmation": None}

    async def put(key, data, ttl):
        return None

    prov = DummyProvider()
    monkeypatch.setattr(llm_service, "cache_json_get", bad_entry)
    monkeypatch.setattr(llm_service, "cache_json_set", put)
    monkeypatch.setattr(llm_service, "_get_provider", lambda: prov)
    copy, source = await llm_service.editorial_copy(_payload())
    assert source == "ai"
    assert copy.explanation == "Made for today."
    assert prov.calls == 1


@pytest.mark.asyncio
async def test_undecodable_cache_value_is_skipped(monkeypatch, enabled):
    async def garbled(key):
        return json.loads("{not json")

    async def put(key, data, ttl):
        return None

    class Broken:
        async def generate_editorial(self, payload, *, timeout_ms):
            raise RuntimeError("provider down")

    monkeypatch.setattr(llm_service, "cache_json_get", garbled)
    monkeypatch.setattr(llm_service, "cache_json_set", put)
    monkeypatch.setattr(llm_service, "_get_provider", lambda: Broken())
    copy, source = await llm_service.editorial_copy(_payload())
    assert source == "template"
    assert copy.affirmation == "You carry your own warmth today."
