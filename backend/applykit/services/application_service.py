"""
Application Service — generate the tailored CV, cover letter and email for one job.

The three documents are independent LLM calls issued concurrently. The
result is only assembled once all three finish; if any call fails the other
two are cancelled and the whole request fails.
"""

from __future__ import annotations

import asyncio
import logging
import re

from applykit.models.application_models import CandidateInfo, GeneratedApplication, JobSummary
from applykit.prompts import application_email, cover_letter, tailored_cv
from applykit.services.llm_service import complete_text
from applykit.utils.dependencies import LLMSelection

logger = logging.getLogger(__name__)


async def generate_application(
    *,
    llm: LLMSelection,
    cv_text: str,
    job: JobSummary,
    candidate: CandidateInfo,
) -> GeneratedApplication:
    """Generate all three application documents for a job."""
    job_id = make_job_id(job.company, job.role)
    logger.info(f"Generating application materials for {job_id}")

    prompts = {
        "tailored_cv": tailored_cv.build_prompt(cv_text, job),
        "cover_letter": cover_letter.build_prompt(job, candidate),
        "application_email": application_email.build_prompt(job, candidate),
    }

    async with asyncio.TaskGroup() as tg:
        tasks = {
            name: tg.create_task(
                complete_text(
                    provider=llm.provider,
                    model_key=llm.model_key,
                    api_key=llm.api_key,
                    prompt=prompt,
                    prompt_name=name,
                )
            )
            for name, prompt in prompts.items()
        }

    result = GeneratedApplication(
        cv=tasks["tailored_cv"].result(),
        cover_letter=tasks["cover_letter"].result(),
        email=tasks["application_email"].result(),
        job_id=job_id,
    )
    logger.info(f"Application materials ready for {job_id}")
    return result


def make_job_id(company: str, role: str) -> str:
    """company_role, lowercased, with every whitespace run replaced by an underscore."""
    return re.sub(r"\s+", "_", f"{company}_{role}").lower()
