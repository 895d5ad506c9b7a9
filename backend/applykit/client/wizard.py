"""
Wizard — the multi-step application flow as an explicit state object.

Landing → Upload → Role selection → Processing → Results. Processing runs
upload, analysis and job search one after another; any failure stops the
run and records the message on the state. Materials for a job are generated
the first time that job is opened and kept on the state afterwards.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel
from typing import Optional

from applykit.client.api_client import ApplyKitClient
from applykit.models.application_models import CandidateInfo, GeneratedApplication, JobSummary
from applykit.models.cv_models import CVAnalysis
from applykit.models.job_models import Job
from applykit.services.application_service import make_job_id

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    LANDING = "LANDING"
    UPLOAD = "UPLOAD"
    ROLE_SELECTION = "ROLE_SELECTION"
    PROCESSING = "PROCESSING"
    RESULTS = "RESULTS"


class SeniorityLevel(str, Enum):
    JUNIOR = "Junior"
    MID = "Mid"
    SENIOR = "Senior"
    LEAD = "Lead"


# Where "back" leads from each view
_BACK = {
    ViewState.UPLOAD: ViewState.LANDING,
    ViewState.ROLE_SELECTION: ViewState.UPLOAD,
    ViewState.PROCESSING: ViewState.ROLE_SELECTION,
    ViewState.RESULTS: ViewState.ROLE_SELECTION,
}


class UserData(BaseModel):
    """What the user entered across the wizard steps."""

    cv_file: Optional[bytes] = None
    cv_file_name: str = "cv.pdf"
    cv_link: str = ""
    role: str = ""
    seniority: SeniorityLevel = SeniorityLevel.MID


class WizardState(BaseModel):
    """All state for one wizard session."""

    view: ViewState = ViewState.LANDING
    user_data: UserData = UserData()
    cv_text: str = ""
    cv_analysis: Optional[CVAnalysis] = None
    jobs: list[Job] = []
    applications: dict[str, GeneratedApplication] = {}
    error: Optional[str] = None

    def go_to(self, view: ViewState) -> None:
        self.view = view

    def back(self) -> None:
        self.view = _BACK.get(self.view, self.view)

    def update_user_data(self, **changes) -> None:
        self.user_data = self.user_data.model_copy(update=changes)

    def can_continue_from_upload(self) -> bool:
        return self.user_data.cv_file is not None or len(self.user_data.cv_link) > 5


async def run_processing(client: ApplyKitClient, state: WizardState) -> bool:
    """
    Upload (when a file was given), analyze, then search, in that order.

    Returns True and moves to RESULTS on success. On failure the error
    message is stored on the state and the wizard stays on PROCESSING.
    """
    state.go_to(ViewState.PROCESSING)
    state.error = None
    user = state.user_data

    try:
        cv_text = ""
        if user.cv_file is not None:
            upload = await client.upload_cv(user.cv_file, user.cv_file_name)
            cv_text = upload.parsed_cv.raw_text

        cv_analysis = await client.analyze_cv(cv_text, user.cv_link or None)
        jobs = await client.search_jobs(cv_analysis, user.role, user.seniority.value)
    except Exception as e:
        logger.warning(f"Processing failed: {e}")
        state.error = str(e) or "An error occurred during processing"
        return False

    state.cv_text = cv_text
    state.cv_analysis = cv_analysis
    state.jobs = jobs
    state.applications = {}
    state.go_to(ViewState.RESULTS)
    return True


async def open_job(client: ApplyKitClient, state: WizardState, job: Job) -> GeneratedApplication:
    """
    Return the materials for a job, generating them on first open.

    Cached per listed job id. Listings are not deduplicated, so two jobs with
    the same company and role are cached separately; the company_role id is
    only used when the model gave the job no id.
    """
    cache_key = job.id or make_job_id(job.company, job.role)
    cached = state.applications.get(cache_key)
    if cached is not None:
        return cached

    analysis = state.cv_analysis or CVAnalysis()
    generated = await client.generate_application(
        state.cv_text,
        JobSummary(
            company=job.company,
            role=job.role,
            description=job.description,
            requirements=job.requirements,
        ),
        CandidateInfo(
            skills=analysis.skills,
            experience=[item.model_dump(by_alias=True) for item in analysis.experience],
        ),
    )
    state.applications[cache_key] = generated
    return generated
