from __future__ import annotations

import json
from typing import Any, Dict, List

from aure.core.taxonomy import ANALYSIS_MOODS, OUTFIT_STYLES, SCENT_FAMILIES
from aure.services.llm.types import EditorialInput, OutfitAnalysisInput


PROMPT_VERSION = "p1"

EDITORIAL_SYS = (
    "You write short, warm fragrance copy for a personal scent ritual app. "
    "Given the chosen perfume and the wearer's context, return ONLY JSON: "
    "{\"explanation\": \"...\", \"affirmation\": \"...\"}. "
    "The explanation is one or two sentences on why the perfume suits today. "
    "The affirmation is a single short sentence addressed to the wearer."
)

ANALYSIS_SYS = (
    "You are a fashion and fragrance expert. Analyze the outfit and suggest complementary scent profiles. "
    "Return ONLY JSON: {\"styleCategories\": [...], \"moodInference\": \"...\", \"colorPalette\": [...], "
    "\"scentDirections\": [...], \"description\": \"...\", \"confidence\": 0-1}. "
    f"Style categories must be from: {', '.join(OUTFIT_STYLES)}. "
    f"Mood must be one of: {', '.join(ANALYSIS_MOODS)}. "
    f"Scent directions must be from: {', '.join(SCENT_FAMILIES)}. "
    "Pick 1-2 style categories, exactly 1 mood and 1-2 scent directions. "
    "The description is 10-15 words. Confidence reflects how clearly the outfit can be read."
)


def build_editorial_prompt(payload: EditorialInput) -> List[Dict[str, str]]:
    user_payload = {
        "perfume": {"name": payload.perfume_name, "house": payload.house, "scent_family": payload.scent_family},
        "mood": payload.mood,
        "occasion": payload.occasion,
        "weather": payload.weather_bucket,
        "aura_words": payload.aura_words,
        "prompt_version": payload.prompt_version or PROMPT_VERSION,
    }
    return [
        {"role": "system", "content": EDITORIAL_SYS},
        {"role": "user", "content": json.dumps(user_payload, ensure_ascii=False)},
    ]


def build_analysis_prompt(payload: OutfitAnalysisInput) -> List[Dict[str, Any]]:
    if payload.image_url or payload.image_base64:
        url = payload.image_url or f"data:{payload.mime_type};base64,{payload.image_base64}"
        content: Any = [
            {"type": "text", "text": json.dumps({"task": "analyze_outfit"}, ensure_ascii=False)},
            {"type": "image_url", "image_url": {"url": url}},
        ]
    else:
        content = f"Outfit description: {payload.description or ''}"
    return [
        {"role": "system", "content": ANALYSIS_SYS},
        {"role": "user", "content": content},
    ]
