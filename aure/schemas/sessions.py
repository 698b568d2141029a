from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from aure.schemas.perfumes import HumidityIn, ScentFamilyIn, TemperatureIn

OutfitStyleIn = Literal["clean", "minimalist", "streetwear", "romantic", "glam", "cozy", "corporate"]


class WeatherIn(BaseModel):
    temperature: Optional[float] = None
    temperature_category: Optional[TemperatureIn] = None
    humidity: Optional[float] = None
    humidity_category: Optional[HumidityIn] = None
    condition: Optional[str] = None
    location: Optional[str] = None
    is_manual: bool = False


class SessionCreate(BaseModel):
    outfit_styles: List[OutfitStyleIn] = Field(default_factory=list, max_length=2)
    mood: str = Field(..., min_length=1, max_length=32)
    scent_directions: List[ScentFamilyIn] = Field(..., min_length=1, max_length=2)
    occasion: str = Field(..., min_length=1, max_length=32)
    weather: Optional[WeatherIn] = None


class RecommendedPerfumeOut(BaseModel):
    user_perfume_id: str
    perfume_id: str
    name: str
    house: str
    scent_family: str
    image_url: Optional[str] = None
    aura_words: List[str] = Field(default_factory=list)


class SessionOut(BaseModel):
    id: str
    status: Literal["completed", "pending"]
    has_recommendation: bool
    outfit_styles: List[str] = Field(default_factory=list)
    mood: str
    scent_directions: List[str] = Field(default_factory=list)
    occasion: str
    weather: Optional[WeatherIn] = None
    recommended_user_perfume_id: Optional[str] = None
    recommendation_type: Optional[str] = None
    match_score: Optional[float] = None
    editorial_explanation: Optional[str] = None
    affirmation: Optional[str] = None
    copy_source: Optional[str] = None
    aura_words: List[str] = Field(default_factory=list)
    perfume: Optional[RecommendedPerfumeOut] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
