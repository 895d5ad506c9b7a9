"""
CV Service — turn uploaded PDFs into text and CV text into a CVAnalysis.

Responsibilities:
  • Extract raw text from PDF (pdfplumber)
  • Clean up extracted text and run the heuristic section parser
  • Send CV text (or a profile link) to the LLM for structured analysis
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any

import pdfplumber

from applykit.models.cv_models import CVAnalysis, EducationItem, ExperienceItem, UploadResult
from applykit.prompts import cv_analysis
from applykit.services.cv_parser import parse_cv
from applykit.services.llm_service import complete_json
from applykit.utils.dependencies import LLMSelection
from applykit.utils.text_cleanup import normalize_text

logger = logging.getLogger(__name__)


class PDFExtractionError(ValueError):
    """The PDF could not be read."""


# ── Public API ───────────────────────────────────────────────────────────────


def process_upload(*, file_bytes: bytes, file_name: str) -> UploadResult:
    """Extract, clean and heuristically parse an uploaded CV."""
    raw_text = normalize_text(extract_pdf_text(file_bytes))
    parsed = parse_cv(raw_text)
    logger.info(
        f"Parsed CV '{file_name}': {len(raw_text)} chars, "
        f"email={'yes' if parsed.email else 'no'} phone={'yes' if parsed.phone else 'no'}"
    )
    return UploadResult(file_name=file_name, file_size=len(file_bytes), parsed_cv=parsed)


async def analyze_cv(
    *,
    llm: LLMSelection,
    cv_text: str | None = None,
    linkedin_url: str | None = None,
) -> CVAnalysis:
    """Ask the LLM for a structured CVAnalysis of the CV text or profile link."""
    source = "cv_text" if cv_text else "linkedin_url"
    logger.info(f"Analyzing CV from {source} with {llm.provider}/{llm.model_key}")

    data = await complete_json(
        provider=llm.provider,
        model_key=llm.model_key,
        api_key=llm.api_key,
        prompt=cv_analysis.build_prompt(cv_text=cv_text, linkedin_url=linkedin_url),
        prompt_name="cv_analysis",
        json_mode=True,
    )

    analysis = build_cv_analysis(data)
    logger.info(
        f"CV analysis: skills={len(analysis.skills)} roles={len(analysis.experience)} "
        f"recommended={len(analysis.recommended_roles)}"
    )
    return analysis


# ── Text Extraction ──────────────────────────────────────────────────────────


def extract_pdf_text(file_bytes: bytes) -> str:
    """Extract text from a PDF file using pdfplumber, pages separated by a blank line."""
    text_parts: list[str] = []
    try:
        with pdfplumber.open(BytesIO(file_bytes)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)
    except Exception as e:
        raise PDFExtractionError("Failed to extract text from PDF") from e
    return "\n\n".join(text_parts)


# ── Helpers ──────────────────────────────────────────────────────────────────


def build_cv_analysis(data: Any) -> CVAnalysis:
    """Build a CVAnalysis from LLM JSON output, with safe defaults for missing fields."""
    if isinstance(data, list):
        data = data[0] if data else {}
    d: dict[str, Any] = data if isinstance(data, dict) else {}

    experience = [
        ExperienceItem(
            title=_safe_str(exp.get("title")),
            company=_safe_str(exp.get("company")),
            duration=_safe_str(exp.get("duration")),
            responsibilities=_ensure_str_list(exp.get("responsibilities")),
        )
        for exp in _ensure_list_of_dicts(d.get("experience"))
    ]

    education = [
        EducationItem(
            degree=_safe_str(edu.get("degree")),
            institution=_safe_str(edu.get("institution")),
            year=_safe_str(edu.get("year")),
        )
        for edu in _ensure_list_of_dicts(d.get("education"))
    ]

    return CVAnalysis(
        skills=_ensure_str_list(d.get("skills")),
        experience=experience,
        education=education,
        strengths=_ensure_str_list(d.get("strengths")),
        recommended_roles=_ensure_str_list(d.get("recommendedRoles")),
    )


def _safe_str(val: Any) -> str:
    return "" if val is None else str(val)


def _ensure_str_list(val: Any) -> list[str]:
    """Ensure the value is a list of strings."""
    if isinstance(val, list):
        return [str(v) for v in val]
    if isinstance(val, str):
        return [val]
    return []


def _ensure_list_of_dicts(val: Any) -> list[dict]:
    """Ensure the value is a list of dicts."""
    if isinstance(val, list):
        return [v for v in val if isinstance(v, dict)]
    return []
