"""
Prompt #4 — Cover Letter

Professional but warm cover letter, 250-350 words.
Temperature: 0.3 | Max tokens: 800 | plain text
"""

from __future__ import annotations

import json

from applykit.models.application_models import CandidateInfo, JobSummary

USER_PROMPT_TEMPLATE = """\
Write a compelling cover letter for this job application:

Job Details:
- Company: {company}
- Role: {role}
- Description: {description}

Candidate Skills: {skills}
Candidate Experience: {experience}

Instructions:
1. Express genuine interest in the company and role
2. Highlight 2-3 key achievements that match the job requirements
3. Show knowledge of the company (be professional but don't make specific claims)
4. Keep it concise (250-350 words)
5. Professional but warm tone
6. Strong opening and closing

Format as a professional cover letter ready to be copied or sent.
"""


def build_prompt(job: JobSummary, candidate: CandidateInfo) -> str:
    return USER_PROMPT_TEMPLATE.format(
        company=job.company,
        role=job.role,
        description=job.description,
        skills=", ".join(candidate.skills),
        experience=json.dumps(candidate.experience),
    )
