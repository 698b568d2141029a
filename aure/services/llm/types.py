from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class LLMUsage(BaseModel):
    model: str = ""
    tokens_in: int = 0
    tokens_out: int = 0
    latency_ms: int = 0
    cached: bool = False
    cache_key: Optional[str] = None
    prompt_version: str = "p1"


class EditorialInput(BaseModel):
    perfume_name: str
    house: str = ""
    scent_family: str
    mood: str
    occasion: str
    weather_bucket: Optional[str] = None
    aura_words: List[str] = Field(default_factory=list)
    prompt_version: str = "p1"


class EditorialOutput(BaseModel):
    explanation: str = ""
    affirmation: str = ""
    usage: LLMUsage = Field(default_factory=LLMUsage)


class OutfitAnalysisInput(BaseModel):
    image_url: Optional[str] = None
    image_base64: Optional[str] = None
    mime_type: str = "image/jpeg"
    description: Optional[str] = None
    prompt_version: str = "p1"


class OutfitAnalysis(BaseModel):
    style_categories: List[str] = Field(default_factory=lambda: ["clean"])
    mood_inference: str = "confident"
    color_palette: List[str] = Field(default_factory=list)
    scent_directions: List[str] = Field(default_factory=lambda: ["fresh"])
    description: str = "Stylish outfit"
    confidence: float = 0.7
    usage: LLMUsage = Field(default_factory=LLMUsage)
