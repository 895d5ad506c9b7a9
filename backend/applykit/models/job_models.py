from pydantic import BaseModel
from typing import Any, Literal, Optional, Union

from applykit.models.common import CamelModel
from applykit.models.cv_models import CVAnalysis


class Job(CamelModel):
    """A job opportunity proposed by the model."""

    id: str = ""
    company: str = ""
    role: str = ""
    location: str = ""
    job_type: str = ""
    description: str = ""
    requirements: list[str] = []
    fit_score: int = 0  # 0-100
    response_prob: int = 0  # 0-100
    match_reason: str = ""


# ── Job list shape returned by the model ────────────────────────────────────


class BareJobList(BaseModel):
    """Model returned a top-level JSON array."""

    kind: Literal["bare"] = "bare"
    items: list[Any]


class WrappedJobList(BaseModel):
    """Model returned an object holding the array under one key (usually "jobs")."""

    kind: Literal["wrapped"] = "wrapped"
    key: str
    items: list[Any]


JobListShape = Union[BareJobList, WrappedJobList]


# ── Request / Response Models ───────────────────────────────────────────────


class JobSearchRequest(CamelModel):
    """Input for /search-jobs. cv_analysis and target_role are required."""

    cv_analysis: Optional[CVAnalysis] = None
    target_role: Optional[str] = None
    seniority: Optional[str] = None


class JobSearchResult(CamelModel):
    """Jobs sorted by fit score, best first."""

    jobs: list[Job]
    total_matches: int
