"""
Prompt #2 — Job Search

Proposes 5-10 job opportunities for the analyzed candidate, each with a fit
score and response probability.
Temperature: 0.0 | Max tokens: 3000
"""

from __future__ import annotations

import json

from applykit.models.cv_models import CVAnalysis

USER_PROMPT_TEMPLATE = """\
You are a job matching AI. Based on the candidate's profile and their target role, generate a list of suitable job opportunities.

Candidate Profile:
- Skills: {skills}
- Experience: {experience}
- Strengths: {strengths}

Target Role: {target_role}
Seniority Level: {seniority}

Generate 5-10 realistic job opportunities that would be a good fit. For each job, calculate:
1. Fit Score (0-100): How well the candidate matches the job requirements
2. Response Probability (0-100): Likelihood of getting a response based on profile match

Return a JSON array with this structure:
[
  {{
    "id": "unique_id",
    "company": "Company Name",
    "role": "Job Title",
    "location": "City, Country or Remote",
    "jobType": "Full-time/Contract/Remote",
    "description": "Brief job description",
    "requirements": ["requirement1", "requirement2", ...],
    "fitScore": 85,
    "responseProb": 78,
    "matchReason": "Why this is a good match for the candidate"
  }}
]

Make the companies and roles realistic and varied. Prioritize:
- Remote-first opportunities
- Companies known for high response rates
- Roles that align with {seniority} level experience
"""


def build_prompt(cv_analysis: CVAnalysis, target_role: str, seniority: str) -> str:
    experience = [item.model_dump(by_alias=True) for item in cv_analysis.experience]
    return USER_PROMPT_TEMPLATE.format(
        skills=", ".join(cv_analysis.skills),
        experience=json.dumps(experience),
        strengths=", ".join(cv_analysis.strengths),
        target_role=target_role,
        seniority=seniority,
    )
