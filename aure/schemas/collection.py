from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from aure.schemas.perfumes import PerfumeOut


class CollectionAdd(BaseModel):
    perfume_id: str
    nickname: Optional[str] = None
    personal_notes: Optional[str] = None


class CollectionAddByName(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    house: str = Field(..., min_length=1, max_length=200)
    # free-form; unknown families fall back to woody
    family: Optional[str] = None
    image_url: Optional[str] = None
    moods: Optional[List[str]] = None
    personal_notes: Optional[str] = None


class CollectionUpdate(BaseModel):
    nickname: Optional[str] = None
    personal_notes: Optional[str] = None
    disliked_notes: Optional[List[str]] = None


class UserPerfumeOut(BaseModel):
    id: str
    perfume_id: str
    nickname: Optional[str] = None
    personal_notes: Optional[str] = None
    disliked_notes: List[str] = Field(default_factory=list)
    is_favorite: bool = False
    wear_count: int = 0
    last_worn_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    perfume: Optional[PerfumeOut] = None
