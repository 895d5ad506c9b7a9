from pydantic import ConfigDict, Field
from typing import Optional

from applykit.models.common import CamelModel


# ── Upload ──────────────────────────────────────────────────────────────────


class ParsedCV(CamelModel):
    """Heuristic parse of uploaded CV text. Built once per upload."""

    model_config = ConfigDict(frozen=True)

    raw_text: str
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: str = ""
    experience: str = ""
    education: str = ""


class UploadResult(CamelModel):
    """Payload of a successful /upload-cv call."""

    file_name: str
    file_size: int
    parsed_cv: ParsedCV = Field(alias="parsedCV")


# ── Analysis ────────────────────────────────────────────────────────────────


class ExperienceItem(CamelModel):
    """A single role as described by the model."""

    title: str = ""
    company: str = ""
    duration: str = ""
    responsibilities: list[str] = []


class EducationItem(CamelModel):
    """A single qualification as described by the model."""

    degree: str = ""
    institution: str = ""
    year: str = ""


class CVAnalysis(CamelModel):
    """Structured CV analysis produced by the model."""

    skills: list[str] = []
    experience: list[ExperienceItem] = []
    education: list[EducationItem] = []
    strengths: list[str] = []
    recommended_roles: list[str] = []


class AnalyzeCVRequest(CamelModel):
    """Input for /analyze-cv. One of the two fields must be non-empty."""

    cv_text: Optional[str] = None
    linkedin_url: Optional[str] = Field(default=None, alias="linkedInURL")
