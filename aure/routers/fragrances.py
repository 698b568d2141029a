from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from aure.auth.deps import get_current_user_id
from aure.schemas.perfumes import FragranceSearchResult
from aure.services.fragrance_search import (
    SearchFailed,
    SearchNotConfigured,
    SearchRateLimited,
    search_fragrances,
)

router = APIRouter(prefix="/fragrances", tags=["fragrances"])


@router.get("/search", response_model=List[FragranceSearchResult])
async def search(
    q: str = Query("", max_length=100),
    limit: int = Query(10, ge=1, le=50),
    user_id: str = Depends(get_current_user_id),
):
    try:
        return await search_fragrances(q, limit)
    except SearchNotConfigured as e:
        raise HTTPException(status_code=503, detail="search_not_configured") from e
    except SearchRateLimited as e:
        raise HTTPException(
            status_code=429,
            detail={"code": "rate_limited", "retry_after": e.retry_after},
            headers={"Retry-After": e.retry_after},
        ) from e
    except SearchFailed as e:
        raise HTTPException(status_code=502, detail="search_failed") from e
