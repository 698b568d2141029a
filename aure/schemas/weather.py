from typing import Optional

from pydantic import BaseModel


class WeatherOut(BaseModel):
    temperature: float
    temperature_category: str
    humidity: float
    humidity_category: str
    condition: str
    location: str
    is_manual: bool = False
    lat: Optional[float] = None
    lon: Optional[float] = None
