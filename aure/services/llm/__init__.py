from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Dict, Optional, Tuple

from redis.exceptions import RedisError

from aure.core.cache import cache_json_get, cache_json_set
from aure.core.config import settings
from aure.recs.editorial import EditorialCopy, compose
from aure.services.llm.providers.base import LLMProvider, NullProvider
from aure.services.llm.providers.openai import OpenAIProvider
from aure.services.llm.prompts import PROMPT_VERSION
from aure.services.llm.types import (
    EditorialInput,
    EditorialOutput,
    LLMUsage,
    OutfitAnalysis,
    OutfitAnalysisInput,
)

logger = logging.getLogger("uvicorn.error")

_provider: LLMProvider | None = None

COPY_SOURCE_AI = "ai"
COPY_SOURCE_TEMPLATE = "template"


def _hash_blob(data: Dict[str, Any]) -> str:
    return hashlib.sha256(json.dumps(data, sort_keys=True, default=str).encode()).hexdigest()


def _get_provider() -> LLMProvider:
    global _provider
    if _provider:
        return _provider
    if not settings.LLM_ENABLED:
        _provider = NullProvider()
        return _provider
    name = (settings.LLM_PROVIDER or "local").lower()
    if name == "openai":
        _provider = OpenAIProvider(settings.LLM_MODEL_EDITORIAL, settings.LLM_MODEL_VISION)
    else:
        _provider = NullProvider()
    return _provider


async def _cache_get(key: str) -> Optional[Any]:
    try:
        return await cache_json_get(key)
    except (RedisError, OSError, ValueError) as e:
        logger.warning("llm: cache read failed key=%s reason=%s", key, e)
        return None


async def _cache_set(key: str, data: Any) -> None:
    try:
        await cache_json_set(key, data, settings.LLM_CACHE_TTL_S)
    except (RedisError, OSError) as e:
        logger.warning("llm: cache write failed key=%s reason=%s", key, e)


def _fallback(payload: EditorialInput) -> Tuple[EditorialCopy, str]:
    copy = compose(payload.perfume_name, payload.scent_family, payload.mood, payload.occasion, payload.weather_bucket)
    return copy, COPY_SOURCE_TEMPLATE


def _usable(out: EditorialOutput) -> bool:
    return bool(out.explanation.strip()) and bool(out.affirmation.strip())


async def editorial_copy(payload: EditorialInput) -> Tuple[EditorialCopy, str]:
    """Explanation and affirmation for a recommendation plus where they came from.

    AI copy is used only when the provider is enabled and returns both fields;
    anything else yields the composed template copy.
    """
    payload.prompt_version = payload.prompt_version or PROMPT_VERSION
    if not settings.LLM_ENABLED:
        return _fallback(payload)

    cache_key = f"llm:editorial:{payload.prompt_version}:{_hash_blob(payload.model_dump(exclude={'prompt_version'}))}"
    cached = await _cache_get(cache_key)
    if cached:
        try:
            out = EditorialOutput.model_validate(cached)
        except ValueError as e:
            logger.warning("llm: discarding bad cache entry key=%s reason=%s", cache_key, e)
        else:
            if _usable(out):
                return EditorialCopy(explanation=out.explanation, affirmation=out.affirmation), COPY_SOURCE_AI

    provider = _get_provider()
    try:
        out = await provider.generate_editorial(payload, timeout_ms=settings.LLM_TIMEOUT_MS)
    except Exception as e:
        logger.warning("llm: editorial failed perfume=%s reason=%r", payload.perfume_name, e)
        return _fallback(payload)
    if not _usable(out):
        logger.info("llm: editorial empty, using template perfume=%s", payload.perfume_name)
        return _fallback(payload)

    out.usage.cached = False
    out.usage.cache_key = cache_key
    await _cache_set(cache_key, out.model_dump())
    return EditorialCopy(explanation=out.explanation.strip(), affirmation=out.affirmation.strip()), COPY_SOURCE_AI


async def analyze_outfit(payload: OutfitAnalysisInput) -> Optional[OutfitAnalysis]:
    """Style/mood/scent reading of an outfit, or None when unavailable."""
    payload.prompt_version = payload.prompt_version or PROMPT_VERSION
    if not settings.LLM_ENABLED:
        return None
    if not (payload.image_url or payload.image_base64 or (payload.description or "").strip()):
        return None

    provider = _get_provider()
    try:
        return await provider.analyze_outfit(payload, timeout_ms=settings.LLM_TIMEOUT_MS)
    except Exception as e:
        logger.warning("llm: outfit analysis failed reason=%r", e)
        return None


__all__ = [
    "COPY_SOURCE_AI",
    "COPY_SOURCE_TEMPLATE",
    "EditorialInput",
    "LLMUsage",
    "OutfitAnalysis",
    "OutfitAnalysisInput",
    "analyze_outfit",
    "editorial_copy",
]
