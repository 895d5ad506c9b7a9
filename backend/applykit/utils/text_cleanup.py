"""
Text cleanup utilities for raw CV text extraction.
"""

from __future__ import annotations

import re
import unicodedata


def normalize_text(text: str) -> str:
    """Normalize whitespace, strip bad unicode, and clean up raw extracted text."""
    text = unicodedata.normalize("NFKC", text)

    # Typographic characters PDF extractors emit
    replacements = {
        "\u2019": "'",   # right single quote
        "\u2018": "'",   # left single quote
        "\u201c": '"',   # left double quote
        "\u201d": '"',   # right double quote
        "\u2013": "-",   # en-dash
        "\u2014": "-",   # em-dash
        "\u2026": "...", # ellipsis
        "\u00a0": " ",   # non-breaking space
        "\u200b": "",    # zero-width space
        "\ufeff": "",    # BOM
    }
    for old, new in replacements.items():
        text = text.replace(old, new)

    # Collapse runs of spaces/tabs
    text = re.sub(r"[ \t]+", " ", text)

    # At most one blank line between blocks
    text = re.sub(r"\n{3,}", "\n\n", text)

    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(lines).strip()
