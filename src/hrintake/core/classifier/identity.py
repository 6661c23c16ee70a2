"""Candidate name and address extraction from the From header and body."""

from __future__ import annotations

import re

UNKNOWN_CANDIDATE_NAME = "Unknown"

_DISPLAY_NAME_RE = re.compile(r"^(.+?)\s*<[^>]+>$")
_BRACKET_EMAIL_RE = re.compile(r"<([^>]+)>")
_EMAIL_RE = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")

# Keywords are case-insensitive but the name must be capitalised words, so
# "hi team" or "hello jane doe" never yield a name. Lowercase names fall through
# to the next pattern and finally to "Unknown".
_NAME = r"([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*)"
BODY_NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(?i:Hi|Hello|Dear)\s+{_NAME}"),
    re.compile(rf"\b(?i:My name is|I am)\s+{_NAME}"),
    re.compile(rf"\b(?i:Sincerely|Best regards|Regards),?\s+{_NAME}"),
)


def extract_candidate_name(from_header: str, body: str) -> str:
    """Return the display name, a name found in the body, or ``"Unknown"``."""
    match = _DISPLAY_NAME_RE.match((from_header or "").strip())
    if match:
        name = match.group(1).strip().strip("\"'").strip()
        if name:
            return name

    for pattern in BODY_NAME_PATTERNS:
        body_match = pattern.search(body or "")
        if body_match:
            return body_match.group(1).strip()

    return UNKNOWN_CANDIDATE_NAME


def extract_candidate_email(from_header: str) -> str:
    """Return the bracketed or embedded address, else the raw header (unvalidated)."""
    from_header = from_header or ""
    match = _BRACKET_EMAIL_RE.search(from_header) or _EMAIL_RE.search(from_header)
    if match:
        return match.group(1).strip()
    return from_header.strip()
