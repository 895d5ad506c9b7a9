from fastapi import APIRouter, Depends, HTTPException
import logging

from applykit.models.application_models import (
    ApplicationRequest,
    CandidateInfo,
    GeneratedApplication,
)
from applykit.models.common import SuccessResponse
from applykit.services.application_service import generate_application
from applykit.utils.dependencies import LLMSelection, get_llm_selection

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-applications", response_model=SuccessResponse[GeneratedApplication])
async def generate_applications_endpoint(
    req: ApplicationRequest,
    llm: LLMSelection = Depends(get_llm_selection),
):
    """Generate a tailored CV, cover letter and application email for one job."""
    if not req.cv_text or req.job is None:
        raise HTTPException(status_code=400, detail="CV text and job details are required")

    try:
        result = await generate_application(
            llm=llm,
            cv_text=req.cv_text,
            job=req.job,
            candidate=req.candidate_info or CandidateInfo(),
        )
    except Exception:
        logger.exception("Error generating applications")
        raise HTTPException(status_code=500, detail="Failed to generate application materials")

    return SuccessResponse[GeneratedApplication](data=result)
