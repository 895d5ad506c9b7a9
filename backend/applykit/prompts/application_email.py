"""
Prompt #5 — Application Email

Short application email: subject line plus a body under 150 words.
Temperature: 0.3 | Max tokens: 400 | plain text
"""

from __future__ import annotations

from applykit.models.application_models import CandidateInfo, JobSummary

# Placeholder signature when the CV analysis found no name
DEFAULT_CANDIDATE_NAME = "[Your Name]"

USER_PROMPT_TEMPLATE = """\
Write a professional job application email for:

Job: {role} at {company}
Candidate: {candidate_name}

Instructions:
1. Subject line that gets attention
2. Brief introduction (2-3 sentences)
3. Mention attached CV and cover letter
4. Express enthusiasm
5. Professional closing
6. Keep it short and impactful (under 150 words)

Format:
Subject: [Subject Line]

[Email Body]
"""


def build_prompt(job: JobSummary, candidate: CandidateInfo) -> str:
    return USER_PROMPT_TEMPLATE.format(
        role=job.role,
        company=job.company,
        candidate_name=candidate.name or DEFAULT_CANDIDATE_NAME,
    )
