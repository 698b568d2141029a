from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from aure.core.taxonomy import ANALYSIS_MOODS, OUTFIT_STYLES, SCENT_FAMILIES
from aure.services.llm.prompts import build_analysis_prompt, build_editorial_prompt
from aure.services.llm.types import (
    EditorialInput,
    EditorialOutput,
    LLMUsage,
    OutfitAnalysis,
    OutfitAnalysisInput,
)

logger = logging.getLogger("uvicorn.error")


class OpenAIProvider:
    def __init__(self, model_editorial: str, model_vision: str):
        self.client = AsyncOpenAI()
        self.model_editorial = model_editorial
        self.model_vision = model_vision

    async def _chat(self, messages: List[Dict[str, Any]], model: str, timeout_ms: int) -> Dict[str, Any]:
        start = time.perf_counter()
        logger.info("llm:openai request model=%s timeout_ms=%s", model, timeout_ms)
        try:
            resp = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=model,
                    messages=messages,
                    temperature=0.4,
                    response_format={"type": "json_object"},
                ),
                timeout=timeout_ms / 1000.0,
            )
        except asyncio.TimeoutError:
            logger.warning("llm:openai timeout model=%s timeout_ms=%s", model, timeout_ms)
            raise
        latency_ms = int((time.perf_counter() - start) * 1000)
        choice = resp.choices[0].message.content if resp.choices else "{}"
        return {
            "content": choice or "{}",
            "latency_ms": latency_ms,
            "tokens_in": getattr(resp.usage, "prompt_tokens", 0) if resp.usage else 0,
            "tokens_out": getattr(resp.usage, "completion_tokens", 0) if resp.usage else 0,
        }

    def _usage(self, model: str, res: Dict[str, Any], prompt_version: str) -> LLMUsage:
        return LLMUsage(
            model=model,
            tokens_in=res["tokens_in"],
            tokens_out=res["tokens_out"],
            latency_ms=res["latency_ms"],
            prompt_version=prompt_version,
        )

    async def generate_editorial(self, payload: EditorialInput, *, timeout_ms: int) -> EditorialOutput:
        messages = build_editorial_prompt(payload)
        res = await self._chat(messages, self.model_editorial, timeout_ms)
        explanation, affirmation = _safe_parse_editorial(res["content"])
        return EditorialOutput(
            explanation=explanation,
            affirmation=affirmation,
            usage=self._usage(self.model_editorial, res, payload.prompt_version),
        )

    async def analyze_outfit(self, payload: OutfitAnalysisInput, *, timeout_ms: int) -> Optional[OutfitAnalysis]:
        messages = build_analysis_prompt(payload)
        model = self.model_vision if (payload.image_url or payload.image_base64) else self.model_editorial
        res = await self._chat(messages, model, timeout_ms)
        analysis = parse_analysis(res["content"])
        if analysis is None:
            logger.warning("llm:openai unparseable analysis model=%s", model)
            return None
        analysis.usage = self._usage(model, res, payload.prompt_version)
        return analysis


def strip_code_fences(raw: str) -> str:
    cleaned = raw.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _safe_parse_editorial(raw: str) -> tuple[str, str]:
    try:
        data = json.loads(strip_code_fences(raw))
    except (TypeError, ValueError):
        return "", ""
    if not isinstance(data, dict):
        return "", ""
    explanation = data.get("explanation")
    affirmation = data.get("affirmation")
    return (
        explanation.strip() if isinstance(explanation, str) else "",
        affirmation.strip() if isinstance(affirmation, str) else "",
    )


def _pick(values: Any, allowed: tuple, limit: int) -> List[str]:
    if not isinstance(values, list):
        return []
    out: List[str] = []
    for v in values:
        if isinstance(v, str) and v.lower() in allowed and v.lower() not in out:
            out.append(v.lower())
    return out[:limit]


def parse_analysis(raw: str) -> Optional[OutfitAnalysis]:
    """Lenient parse of an outfit analysis; unknown enum values are dropped and
    missing fields take defaults. Returns None when the payload is not JSON."""
    try:
        data = json.loads(strip_code_fences(raw))
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    out = OutfitAnalysis()
    styles = _pick(data.get("styleCategories"), OUTFIT_STYLES, 2)
    if styles:
        out.style_categories = styles
    mood = data.get("moodInference")
    if isinstance(mood, str) and mood.lower() in ANALYSIS_MOODS:
        out.mood_inference = mood.lower()
    palette = data.get("colorPalette")
    if isinstance(palette, list):
        out.color_palette = [str(c) for c in palette][:5]
    directions = _pick(data.get("scentDirections"), SCENT_FAMILIES, 2)
    if directions:
        out.scent_directions = directions
    description = data.get("description")
    if isinstance(description, str) and description.strip():
        out.description = description.strip()
    confidence = data.get("confidence")
    if isinstance(confidence, (int, float)) and not isinstance(confidence, bool):
        out.confidence = min(1.0, max(0.0, float(confidence)))
    return out
