from typing import List, Optional

from pydantic import BaseModel, model_validator


class OutfitAnalyzeIn(BaseModel):
    image_url: Optional[str] = None
    image_base64: Optional[str] = None
    mime_type: str = "image/jpeg"
    description: Optional[str] = None

    @model_validator(mode="after")
    def _needs_input(self):
        if not (self.image_url or self.image_base64 or (self.description or "").strip()):
            raise ValueError("image_url, image_base64 or description is required")
        return self


class OutfitAnalysisOut(BaseModel):
    style_categories: List[str]
    mood_inference: str
    color_palette: List[str]
    scent_directions: List[str]
    description: str
    confidence: float


class OutfitAnalyzeOut(BaseModel):
    analysis: Optional[OutfitAnalysisOut] = None
    fallback: Optional[str] = None
