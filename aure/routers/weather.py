from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from aure.auth.deps import get_current_user_id
from aure.schemas.weather import WeatherOut
from aure.services import weather as weather_service

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("", response_model=Optional[WeatherOut])
async def current_weather(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    city: Optional[str] = Query(None, min_length=1, max_length=120),
    user_id: str = Depends(get_current_user_id),
):
    if lat is not None and lon is not None:
        report = await weather_service.fetch_weather_by_coords(lat, lon)
    elif city:
        report = await weather_service.fetch_weather_by_city(city)
    else:
        raise HTTPException(status_code=400, detail="lat_lon_or_city_required")
    return WeatherOut(**report.to_dict()) if report else None
