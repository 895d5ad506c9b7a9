"""
CV Parser — heuristic section and contact extraction from plain CV text.

Sections are located by case-insensitive substring search for a header
keyword and end where the next known section keyword starts. This is a
heuristic: a header word used in ordinary prose inside another section
will produce a wrong boundary.
"""

from __future__ import annotations

import re

from applykit.models.cv_models import ParsedCV

# Every keyword that can end a section, in no particular order
SECTION_BOUNDARIES = (
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "awards",
    "publications",
    "languages",
    "interests",
    "references",
)

SKILLS_HEADERS = ("skills", "technical skills", "competencies")
EXPERIENCE_HEADERS = ("experience", "work experience", "employment")
EDUCATION_HEADERS = ("education", "academic", "qualifications")

_EMAIL = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
_PHONE = re.compile(r"[\d\s\-+()]{10,}")


def _find(text: str, keyword: str, start: int = 0) -> int:
    """Case-insensitive str.find that keeps indices valid for the original text."""
    match = re.compile(re.escape(keyword), re.IGNORECASE).search(text, start)
    return match.start() if match else -1


def find_next_section(text: str, start_from: int) -> int:
    """Index of the earliest boundary keyword at or after start_from, else len(text)."""
    next_index = len(text)
    for keyword in SECTION_BOUNDARIES:
        index = _find(text, keyword, start_from)
        if index != -1 and index < next_index:
            next_index = index
    return next_index


def extract_section(text: str, headers: tuple[str, ...] | list[str]) -> str:
    """
    Return the section introduced by the first header found, in priority order.

    The slice runs from the header itself up to the next boundary keyword
    (searched from just past the header). Empty string when no header occurs.
    """
    for header in headers:
        header_index = _find(text, header)
        if header_index != -1:
            end = find_next_section(text, header_index + len(header))
            return text[header_index:end].strip()
    return ""


def extract_email(text: str) -> str | None:
    match = _EMAIL.search(text)
    return match.group(0) if match else None


def extract_phone(text: str) -> str | None:
    """First 10+ character run of digits/spaces/-+() that is not pure whitespace."""
    for match in _PHONE.finditer(text):
        candidate = match.group(0).strip()
        if candidate:
            return candidate
    return None


def parse_cv(text: str) -> ParsedCV:
    """Build a ParsedCV from extracted CV text."""
    return ParsedCV(
        raw_text=text,
        email=extract_email(text),
        phone=extract_phone(text),
        skills=extract_section(text, SKILLS_HEADERS),
        experience=extract_section(text, EXPERIENCE_HEADERS),
        education=extract_section(text, EDUCATION_HEADERS),
    )
