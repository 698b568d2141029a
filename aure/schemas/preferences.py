from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class LocationIn(BaseModel):
    city: Optional[str] = None
    country: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None


class PreferencesIn(BaseModel):
    scent_preferences: Optional[List[str]] = None
    avoid_notes: Optional[List[str]] = None
    default_location: Optional[LocationIn] = None
    use_weather_context: Optional[bool] = None


class PreferencesOut(BaseModel):
    id: str
    scent_preferences: Optional[List[str]] = None
    avoid_notes: Optional[List[str]] = None
    default_location: Optional[LocationIn] = None
    use_weather_context: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
