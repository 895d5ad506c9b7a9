"""
Prompt #1 — CV Analysis

Turns CV text (or a profile link) into a structured CVAnalysis object.
Temperature: 0.0 | Max tokens: 2000 | JSON mode
"""

from __future__ import annotations

from applykit.utils.linkedin import parse_linkedin_url

USER_PROMPT_TEMPLATE = """\
Analyze the following CV/resume and extract structured information:

{cv_source}

Return a JSON object with the following structure:
{{
  "skills": ["skill1", "skill2", ...],
  "experience": [
    {{
      "title": "Job Title",
      "company": "Company Name",
      "duration": "Start - End",
      "responsibilities": ["responsibility1", "responsibility2", ...]
    }}
  ],
  "education": [
    {{
      "degree": "Degree Name",
      "institution": "School Name",
      "year": "Graduation Year"
    }}
  ],
  "strengths": ["strength1", "strength2", ...],
  "recommendedRoles": ["role1", "role2", ...]
}}

Extract all relevant information and provide recommendations for suitable job roles based on the candidate's profile.
"""


def build_prompt(cv_text: str | None = None, linkedin_url: str | None = None) -> str:
    """CV text wins over the profile link when both are given."""
    if cv_text:
        cv_source = cv_text
    else:
        profile = parse_linkedin_url(linkedin_url or "")
        cv_source = f"LinkedIn Profile: {profile.url}"
        if profile.username:
            cv_source += f"\nLinkedIn Username: {profile.username}"
    return USER_PROMPT_TEMPLATE.format(cv_source=cv_source)
