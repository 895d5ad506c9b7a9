from fastapi import APIRouter, Depends, HTTPException
import logging

from applykit.models.common import SuccessResponse
from applykit.models.job_models import JobSearchRequest, JobSearchResult
from applykit.services.job_service import search_jobs
from applykit.utils.dependencies import LLMSelection, get_llm_selection

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_SENIORITY = "Mid"


@router.post("/search-jobs", response_model=SuccessResponse[JobSearchResult])
async def search_jobs_endpoint(
    req: JobSearchRequest,
    llm: LLMSelection = Depends(get_llm_selection),
):
    """Propose jobs matching the analyzed CV, sorted by fit score."""
    if req.cv_analysis is None or not req.target_role:
        raise HTTPException(status_code=400, detail="CV analysis and target role are required")

    try:
        result = await search_jobs(
            llm=llm,
            cv_analysis=req.cv_analysis,
            target_role=req.target_role,
            seniority=req.seniority or DEFAULT_SENIORITY,
        )
    except Exception:
        logger.exception("Error searching jobs")
        raise HTTPException(status_code=500, detail="Failed to search for jobs")

    return SuccessResponse[JobSearchResult](data=result)
