from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class WearLogIn(BaseModel):
    perfume_id: str
    session_id: Optional[str] = None
    vibe_id: Optional[str] = None
    notes: Optional[str] = None
    worn_at: Optional[datetime] = None


class WearLogOut(BaseModel):
    id: str
    perfume_id: str
    perfume_name: str
    perfume_house: Optional[str] = None
    scent_family: Optional[str] = None
    session_id: Optional[str] = None
    vibe_id: Optional[str] = None
    notes: Optional[str] = None
    worn_at: datetime


class FamilyShareOut(BaseModel):
    family: str
    count: int
    percentage: int


class MostWornOut(BaseModel):
    perfume_id: str
    name: str
    house: Optional[str] = None
    count: int


class FavoritePerfumeOut(BaseModel):
    name: str
    house: str
    wear_count: int


class WearStatsOut(BaseModel):
    total_wears: int = 0
    current_streak: int = 0
    favorite_family: Optional[str] = None
    favorite_perfume: Optional[FavoritePerfumeOut] = None
    family_breakdown: List[FamilyShareOut] = Field(default_factory=list)
    family_counts: Dict[str, int] = Field(default_factory=dict)
    most_worn: List[MostWornOut] = Field(default_factory=list)
    first_wear: Optional[datetime] = None
    last_wear: Optional[datetime] = None
    unique_perfumes: int = 0
