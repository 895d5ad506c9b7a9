from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from typing import Optional
import logging

from applykit.config import settings
from applykit.models.common import SuccessResponse
from applykit.models.cv_models import AnalyzeCVRequest, CVAnalysis, UploadResult
from applykit.services.cv_service import analyze_cv, process_upload
from applykit.utils.dependencies import LLMSelection, get_llm_selection

logger = logging.getLogger(__name__)

router = APIRouter()

PDF_CONTENT_TYPE = "application/pdf"


@router.post("/upload-cv", response_model=SuccessResponse[UploadResult])
async def upload_cv(cv: Optional[UploadFile] = File(None)):
    """Upload a CV as PDF, extract its text and split out the main sections."""
    if cv is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if cv.content_type != PDF_CONTENT_TYPE:
        raise HTTPException(status_code=400, detail="Only PDF files are supported")

    # Reject on the reported size before reading the body into memory
    if cv.size is not None and cv.size > settings.max_upload_bytes:
        raise _too_large()

    file_bytes = await cv.read()
    if len(file_bytes) > settings.max_upload_bytes:
        raise _too_large()

    try:
        result = process_upload(file_bytes=file_bytes, file_name=cv.filename or "cv.pdf")
    except Exception:
        logger.exception("Error uploading CV")
        raise HTTPException(status_code=500, detail="Failed to process CV")

    return SuccessResponse[UploadResult](data=result)


@router.post("/analyze-cv", response_model=SuccessResponse[CVAnalysis])
async def analyze_cv_endpoint(
    req: AnalyzeCVRequest,
    llm: LLMSelection = Depends(get_llm_selection),
):
    """Analyze CV text, or a LinkedIn profile link, into structured fields."""
    if not req.cv_text and not req.linkedin_url:
        raise HTTPException(status_code=400, detail="CV text or LinkedIn URL is required")

    try:
        analysis = await analyze_cv(llm=llm, cv_text=req.cv_text, linkedin_url=req.linkedin_url)
    except Exception:
        logger.exception("Error analyzing CV")
        raise HTTPException(status_code=500, detail="Failed to analyze CV")

    return SuccessResponse[CVAnalysis](data=analysis)


def _too_large() -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=f"File size exceeds {settings.max_upload_mb}MB limit",
    )
