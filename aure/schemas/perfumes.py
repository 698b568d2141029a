from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ScentFamilyIn = Literal["fresh", "floral", "woody", "amber", "gourmand", "musky"]
PerformanceIn = Literal["office-safe", "balanced", "loud"]
TemperatureIn = Literal["hot", "warm", "mild", "cool", "cold"]
HumidityIn = Literal["dry", "moderate", "humid"]


class PerfumeNotes(BaseModel):
    top: List[str] = Field(default_factory=list)
    heart: List[str] = Field(default_factory=list)
    base: List[str] = Field(default_factory=list)


class WeatherPerformance(BaseModel):
    ideal_temperature: List[TemperatureIn] = Field(default_factory=list)
    ideal_humidity: List[HumidityIn] = Field(default_factory=list)
    temperature_boost: Optional[float] = Field(None, ge=-2, le=2)
    humidity_boost: Optional[float] = Field(None, ge=-2, le=2)


class PerfumeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    house: str = Field(..., min_length=1, max_length=200)
    scent_family: ScentFamilyIn
    secondary_scent_family: Optional[ScentFamilyIn] = None
    performance: PerformanceIn = "balanced"
    notes: PerfumeNotes = Field(default_factory=PerfumeNotes)
    aura_words: List[str] = Field(default_factory=list)
    outfit_styles: List[str] = Field(default_factory=list)
    occasions: List[str] = Field(default_factory=list)
    moods: List[str] = Field(default_factory=list)
    weather_performance: WeatherPerformance = Field(default_factory=WeatherPerformance)
    description: Optional[str] = None
    image_url: Optional[str] = None


class PerfumeOut(BaseModel):
    id: str
    name: str
    house: str
    scent_family: str
    secondary_scent_family: Optional[str] = None
    performance: str
    notes: PerfumeNotes
    aura_words: List[str] = Field(default_factory=list)
    outfit_styles: List[str] = Field(default_factory=list)
    occasions: List[str] = Field(default_factory=list)
    moods: List[str] = Field(default_factory=list)
    weather_performance: WeatherPerformance
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None


class FragranceSearchResult(BaseModel):
    id: str
    name: str
    brand: str
    image_url: Optional[str] = None
    scent_family: Optional[str] = None
    gender: Optional[str] = None
    year: Optional[str] = None
    top_notes: List[str] = Field(default_factory=list)
    heart_notes: List[str] = Field(default_factory=list)
    base_notes: List[str] = Field(default_factory=list)
