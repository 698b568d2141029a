from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class VibeCreate(BaseModel):
    session_id: str
    name: str = Field(..., min_length=1, max_length=120)
    notes: Optional[str] = None
    outfit_image_key: Optional[str] = None


class VibeOut(BaseModel):
    id: str
    session_id: str
    name: str
    notes: Optional[str] = None
    has_image: bool = False
    outfit_image_key: Optional[str] = None
    outfit_image_url: Optional[str] = None
    perfume_name: str
    perfume_house: str
    scent_family: str
    perfume_image_url: Optional[str] = None
    aura_words: List[str] = Field(default_factory=list)
    mood: str
    occasion: str
    created_at: Optional[datetime] = None


class VibeImageUploadIn(BaseModel):
    content_type: str = "image/jpeg"


class VibeImageUploadOut(BaseModel):
    key: str
    upload_url: str
    headers: dict = Field(default_factory=dict)
    expires_in: int
