from fastapi import APIRouter, Depends

from aure.auth.deps import get_current_user_id
from aure.schemas.outfit import OutfitAnalysisOut, OutfitAnalyzeIn, OutfitAnalyzeOut
from aure.services import llm as llm_service
from aure.services.llm.types import OutfitAnalysisInput

router = APIRouter(prefix="/outfit", tags=["outfit"])


@router.post("/analyze", response_model=OutfitAnalyzeOut)
async def analyze(
    payload: OutfitAnalyzeIn,
    user_id: str = Depends(get_current_user_id),
):
    analysis = await llm_service.analyze_outfit(OutfitAnalysisInput(**payload.model_dump()))
    if analysis is None:
        return OutfitAnalyzeOut(analysis=None, fallback="manual")
    return OutfitAnalyzeOut(analysis=OutfitAnalysisOut(**analysis.model_dump(exclude={"usage"})))
