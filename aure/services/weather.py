"""Current weather from Open-Meteo, labelled via Nominatim reverse geocoding.

Every public function returns None instead of raising; weather is context, never a blocker.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import httpx

from aure.core.config import settings
from aure.recs.buckets import categorize_humidity, categorize_temperature

logger = logging.getLogger("uvicorn.error")

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
GEOCODE_URL = "https://geocoding-api.open-meteo.com/v1/search"
REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_LOCATION = "Current location"
USER_AGENT = "aure-api/0.1"


@dataclass
class WeatherReport:
    temperature: float
    temperature_category: str
    humidity: float
    humidity_category: str
    condition: str
    location: str
    is_manual: bool = False
    lat: Optional[float] = None
    lon: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def condition_from_code(code: int) -> str:
    if code == 0:
        return "Clear"
    if code <= 3:
        return "Partly cloudy"
    if code <= 48:
        return "Foggy"
    if code <= 57:
        return "Drizzle"
    if code <= 67:
        return "Rainy"
    if code <= 77:
        return "Snowy"
    if code <= 82:
        return "Showers"
    if code <= 86:
        return "Snow showers"
    if code >= 95:
        return "Thunderstorm"
    return "Cloudy"


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.WEATHER_TIMEOUT_S, headers={"User-Agent": USER_AGENT})


async def _reverse_label(client: httpx.AsyncClient, lat: float, lon: float) -> str:
    try:
        resp = await client.get(REVERSE_URL, params={"lat": lat, "lon": lon, "format": "json"})
        if resp.status_code != 200:
            return DEFAULT_LOCATION
        address = (resp.json() or {}).get("address") or {}
    except (httpx.HTTPError, ValueError) as e:
        logger.info("weather: reverse geocode failed lat=%s lon=%s reason=%s", lat, lon, e)
        return DEFAULT_LOCATION
    city = address.get("city") or address.get("town") or address.get("village") or address.get("suburb")
    country = address.get("country")
    if city and country:
        return f"{city}, {country}"
    return city or DEFAULT_LOCATION


async def _current(client: httpx.AsyncClient, lat: float, lon: float) -> Optional[Dict[str, Any]]:
    resp = await client.get(
        FORECAST_URL,
        params={
            "latitude": lat,
            "longitude": lon,
            "current": "temperature_2m,relative_humidity_2m,weather_code",
            "temperature_unit": "celsius",
        },
    )
    if resp.status_code != 200:
        logger.warning("weather: forecast status=%s lat=%s lon=%s", resp.status_code, lat, lon)
        return None
    return (resp.json() or {}).get("current")


def _report(current: Dict[str, Any], location: str, lat: float, lon: float) -> WeatherReport:
    temp = float(current["temperature_2m"])
    humidity = float(current["relative_humidity_2m"])
    return WeatherReport(
        temperature=temp,
        temperature_category=categorize_temperature(temp),
        humidity=humidity,
        humidity_category=categorize_humidity(humidity),
        condition=condition_from_code(int(current.get("weather_code") or 0)),
        location=location,
        lat=lat,
        lon=lon,
    )


async def fetch_weather_by_coords(lat: float, lon: float) -> Optional[WeatherReport]:
    if not settings.WEATHER_ENABLED:
        return None
    try:
        async with _client() as client:
            current = await _current(client, lat, lon)
            if not current:
                return None
            label = await _reverse_label(client, lat, lon)
            return _report(current, label, lat, lon)
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning("weather: fetch failed lat=%s lon=%s reason=%r", lat, lon, e)
        return None


async def fetch_weather_by_city(city: str) -> Optional[WeatherReport]:
    if not settings.WEATHER_ENABLED or not city.strip():
        return None
    try:
        async with _client() as client:
            resp = await client.get(
                GEOCODE_URL, params={"name": city.strip(), "count": 1, "language": "en", "format": "json"}
            )
            if resp.status_code != 200:
                logger.warning("weather: geocode status=%s city=%s", resp.status_code, city)
                return None
            results = (resp.json() or {}).get("results") or []
            if not results:
                logger.info("weather: no geocode match city=%s", city)
                return None
            place = results[0]
            lat, lon = float(place["latitude"]), float(place["longitude"])
            current = await _current(client, lat, lon)
            if not current:
                return None
            label = ", ".join(p for p in (place.get("name"), place.get("country")) if p) or city
            return _report(current, label, lat, lon)
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning("weather: fetch failed city=%s reason=%r", city, e)
        return None
