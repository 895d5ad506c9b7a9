"""
Job Service — ask the LLM for matching jobs and normalize the answer.

Models disagree on the top-level shape of a job list: some return a bare
array, others wrap it in an object (usually {"jobs": [...]}). The shape is
classified once in classify_job_list() and unwrapped there; everything
downstream sees a plain list.
"""

from __future__ import annotations

import logging
from typing import Any

from applykit.models.cv_models import CVAnalysis
from applykit.models.job_models import (
    BareJobList,
    Job,
    JobListShape,
    JobSearchResult,
    WrappedJobList,
)
from applykit.prompts import job_search
from applykit.services.llm_service import complete_json
from applykit.utils.dependencies import LLMSelection
from applykit.utils.json_response import LLMResponseError

logger = logging.getLogger(__name__)


async def search_jobs(
    *,
    llm: LLMSelection,
    cv_analysis: CVAnalysis,
    target_role: str,
    seniority: str,
) -> JobSearchResult:
    """Generate job matches for the candidate, best fit first."""
    logger.info(f"Searching jobs: role={target_role!r} seniority={seniority!r}")

    data = await complete_json(
        provider=llm.provider,
        model_key=llm.model_key,
        api_key=llm.api_key,
        prompt=job_search.build_prompt(cv_analysis, target_role, seniority),
        prompt_name="job_search",
    )

    shape = classify_job_list(data)
    jobs = sort_by_fit([build_job(item) for item in shape.items if isinstance(item, dict)])
    logger.info(f"Job search: {shape.kind} list, {len(jobs)} jobs")
    return JobSearchResult(jobs=jobs, total_matches=len(jobs))


# ── Normalization ────────────────────────────────────────────────────────────


def classify_job_list(data: Any) -> JobListShape:
    """
    Resolve the job list shape returned by the model.

    A list is a bare job list. A dict is a wrapped list if it holds a list
    under "jobs", or if it has exactly one key and that value is a list.
    Anything else raises LLMResponseError.
    """
    if isinstance(data, list):
        return BareJobList(items=data)

    if isinstance(data, dict):
        if isinstance(data.get("jobs"), list):
            return WrappedJobList(key="jobs", items=data["jobs"])
        if len(data) == 1:
            key, value = next(iter(data.items()))
            if isinstance(value, list):
                return WrappedJobList(key=key, items=value)

    raise LLMResponseError(f"Unexpected job list shape: {type(data).__name__}")


def sort_by_fit(jobs: list[Job]) -> list[Job]:
    """Sort by fit score, highest first. Ties keep their input order."""
    return sorted(jobs, key=lambda job: job.fit_score, reverse=True)


def build_job(d: dict[str, Any]) -> Job:
    """Build a Job from one LLM list entry, with safe defaults."""
    return Job(
        id=_safe_str(d.get("id")),
        company=_safe_str(d.get("company")),
        role=_safe_str(d.get("role")),
        location=_safe_str(d.get("location")),
        job_type=_safe_str(d.get("jobType")),
        description=_safe_str(d.get("description")),
        requirements=_ensure_str_list(d.get("requirements")),
        fit_score=_safe_score(d.get("fitScore")),
        response_prob=_safe_score(d.get("responseProb")),
        match_reason=_safe_str(d.get("matchReason")),
    )


# ── Helpers ──────────────────────────────────────────────────────────────────


def _safe_score(val: Any) -> int:
    """Parse a 0-100 score as a whole number, clamped; 0 when unparseable."""
    if isinstance(val, bool) or val is None:
        return 0
    try:
        score = float(str(val).strip().rstrip("%"))
    except ValueError:
        return 0
    if score != score:  # NaN
        return 0
    return round(max(0.0, min(100.0, score)))


def _safe_str(val: Any) -> str:
    return "" if val is None else str(val)


def _ensure_str_list(val: Any) -> list[str]:
    """Ensure the value is a list of strings."""
    if isinstance(val, list):
        return [str(v) for v in val]
    if isinstance(val, str):
        return [val]
    return []
