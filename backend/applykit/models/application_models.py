from typing import Any, Optional

from applykit.models.common import CamelModel


class JobSummary(CamelModel):
    """The parts of a Job the generation prompts use."""

    company: str
    role: str
    description: str = ""
    requirements: list[str] = []


class CandidateInfo(CamelModel):
    """Candidate details forwarded from the CV analysis."""

    name: Optional[str] = None
    email: Optional[str] = None
    skills: list[str] = []
    experience: list[Any] = []


class ApplicationRequest(CamelModel):
    """Input for /generate-applications. cv_text and job are required."""

    cv_text: Optional[str] = None
    job: Optional[JobSummary] = None
    candidate_info: Optional[CandidateInfo] = None


class GeneratedApplication(CamelModel):
    """Tailored materials for one job."""

    cv: str
    cover_letter: str
    email: str
    job_id: str
