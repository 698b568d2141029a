import logging
from typing import Any, Dict, List, Optional

import httpx

from aure.core.config import settings
from aure.schemas.perfumes import FragranceSearchResult

logger = logging.getLogger("uvicorn.error")

MIN_QUERY_LEN = 2

MOCK_FRAGRANCES = [
    ("Bleu de Chanel", "Chanel", "Woody Aromatic"),
    ("Chanel No. 5", "Chanel", "Floral Aldehyde"),
    ("Coco Mademoiselle", "Chanel", "Floral Oriental"),
    ("Sauvage", "Dior", "Aromatic Fougère"),
    ("Miss Dior", "Dior", "Floral Chypre"),
    ("J'adore", "Dior", "Floral Fruity"),
    ("Aventus", "Creed", "Fruity Chypre"),
    ("Green Irish Tweed", "Creed", "Aromatic Green"),
    ("Silver Mountain Water", "Creed", "Citrus Aromatic"),
    ("La Vie Est Belle", "Lancôme", "Floral Gourmand"),
    ("Black Opium", "Yves Saint Laurent", "Amber Vanilla"),
    ("Libre", "Yves Saint Laurent", "Floral Lavender"),
    ("Acqua di Gio", "Giorgio Armani", "Aquatic Aromatic"),
    ("Si", "Giorgio Armani", "Floral Fruity"),
    ("Light Blue", "Dolce & Gabbana", "Citrus Floral"),
    ("The One", "Dolce & Gabbana", "Oriental Spicy"),
    ("Oud Wood", "Tom Ford", "Woody Oud"),
    ("Black Orchid", "Tom Ford", "Oriental Floral"),
    ("Tobacco Vanille", "Tom Ford", "Amber Spicy"),
    ("Lost Cherry", "Tom Ford", "Fruity Gourmand"),
    ("Baccarat Rouge 540", "Maison Francis Kurkdjian", "Amber Floral"),
    ("Grand Soir", "Maison Francis Kurkdjian", "Amber Woody"),
    ("Delina", "Parfums de Marly", "Floral Fruity"),
    ("Layton", "Parfums de Marly", "Amber Aromatic"),
    ("Molecule 01", "Escentric Molecules", "Woody Musky"),
    ("Good Girl", "Carolina Herrera", "Floral Oriental"),
    ("Flowerbomb", "Viktor & Rolf", "Floral Oriental"),
    ("Spicebomb", "Viktor & Rolf", "Spicy Tobacco"),
    ("Her", "Burberry", "Fruity Gourmand"),
    ("Gypsy Water", "Byredo", "Woody Aromatic"),
]


class SearchNotConfigured(Exception):
    pass


class SearchRateLimited(Exception):
    def __init__(self, retry_after: str = "30"):
        super().__init__(retry_after)
        self.retry_after = retry_after


class SearchFailed(Exception):
    pass


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=10.0)


def search_mock(query: str, limit: int) -> List[FragranceSearchResult]:
    q = query.lower()
    out: List[FragranceSearchResult] = []
    for idx, (name, house, family) in enumerate(MOCK_FRAGRANCES, start=1):
        if q in name.lower() or q in house.lower() or q in family.lower():
            out.append(FragranceSearchResult(id=str(idx), name=name, brand=house, scent_family=family))
    return out[:limit]


def _strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v]


def _notes(raw: Dict[str, Any], key: str) -> List[str]:
    notes = raw.get("Notes") or {}
    if not isinstance(notes, dict):
        return []
    return [n.get("name") if isinstance(n, dict) else str(n) for n in notes.get(key) or [] if n]


def parse_result(raw: Dict[str, Any]) -> FragranceSearchResult:
    """Normalize one Fragella record; the API capitalizes its field names."""
    name = raw.get("Name") or raw.get("name") or "Unknown"
    brand = raw.get("Brand") or raw.get("brand") or "Unknown"
    image = raw.get("Image URL") or raw.get("image_url")
    accords = _strings(raw.get("Main Accords"))
    year = raw.get("Year")
    return FragranceSearchResult(
        # Fragella has no stable ids
        id=f"{brand}:{name}",
        name=str(name),
        brand=str(brand),
        image_url=str(image) if image else None,
        scent_family=accords[0] if accords else None,
        gender=str(raw["Gender"]) if raw.get("Gender") else None,
        year=str(year) if year else None,
        top_notes=_notes(raw, "Top"),
        heart_notes=_notes(raw, "Middle"),
        base_notes=_notes(raw, "Base"),
    )


async def search_fragrances(query: str, limit: int = 10) -> List[FragranceSearchResult]:
    query = (query or "").strip()
    if len(query) < MIN_QUERY_LEN:
        return []
    if settings.FRAGRANCE_SEARCH_MOCK:
        return search_mock(query, limit)
    if not settings.FRAGELLA_API_KEY:
        logger.error("search: FRAGELLA_API_KEY is not configured")
        raise SearchNotConfigured()

    try:
        async with _client() as client:
            resp = await client.get(
                settings.FRAGELLA_API_URL,
                params={"search": query, "limit": limit},
                headers={"x-api-key": settings.FRAGELLA_API_KEY},
            )
    except httpx.HTTPError as e:
        logger.warning("search: upstream request failed q=%s reason=%r", query, e)
        raise SearchFailed() from e

    if resp.status_code == 429:
        retry_after = resp.headers.get("Retry-After") or "30"
        logger.warning("search: rate limited q=%s retry_after=%s", query, retry_after)
        raise SearchRateLimited(retry_after=retry_after)
    if resp.status_code != 200:
        logger.warning("search: upstream status=%s q=%s", resp.status_code, query)
        raise SearchFailed()

    try:
        data = resp.json()
    except ValueError as e:
        raise SearchFailed() from e
    records: Optional[Any] = data if isinstance(data, list) else (data or {}).get("data") or (data or {}).get("results")
    results = [parse_result(r) for r in (records or []) if isinstance(r, dict)]
    logger.info("search: q=%s results=%d", query, len(results))
    return results[:limit]
