"""
Prompt #3 — Tailored CV

Reorders and reframes the original CV text for one job.
Temperature: 0.3 | Max tokens: 2000 | plain text
"""

from __future__ import annotations

from applykit.models.application_models import JobSummary

USER_PROMPT_TEMPLATE = """\
Create a tailored CV for the following job application:

Original CV:
{cv_text}

Target Job:
- Company: {company}
- Role: {role}
- Description: {description}
- Requirements: {requirements}

Instructions:
1. Reorganize the experience section to highlight relevant skills for this role
2. Add keywords from the job requirements naturally throughout
3. Emphasize achievements that match the job description
4. Keep it professional and ATS-friendly
5. Maintain the original information but reframe it to match the role

Format the CV in a clean, professional text format suitable for copying.
"""


def build_prompt(cv_text: str, job: JobSummary) -> str:
    return USER_PROMPT_TEMPLATE.format(
        cv_text=cv_text,
        company=job.company,
        role=job.role,
        description=job.description,
        requirements=", ".join(job.requirements),
    )
