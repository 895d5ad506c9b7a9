"""
LinkedIn profile URL helpers.

Profiles are not scraped (that needs OAuth and runs against LinkedIn's terms);
the URL is passed to the model as a reference.
"""

from __future__ import annotations

import re

from pydantic import BaseModel
from typing import Optional

_PROFILE_URL = re.compile(r"^https?://(www\.)?linkedin\.com/(in|pub)/[\w-]+/?$", re.IGNORECASE)
_USERNAME = re.compile(r"linkedin\.com/(in|pub)/([\w-]+)", re.IGNORECASE)


class LinkedInProfile(BaseModel):
    url: str
    username: Optional[str] = None
    is_valid: bool


def validate_linkedin_url(url: str) -> bool:
    return bool(_PROFILE_URL.match(url.strip()))


def extract_linkedin_username(url: str) -> str | None:
    match = _USERNAME.search(url)
    return match.group(2) if match else None


def parse_linkedin_url(url: str) -> LinkedInProfile:
    is_valid = validate_linkedin_url(url)
    return LinkedInProfile(
        url=url,
        username=extract_linkedin_username(url) if is_valid else None,
        is_valid=is_valid,
    )
