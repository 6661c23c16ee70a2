"""Subject line parsing for forwarded application emails."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Sequence

import structlog


@dataclass(frozen=True, slots=True)
class ParsedSubject:
    job_title: str
    company_name: str


SubjectExtractor = Callable[[re.Match[str]], "ParsedSubject | None"]


def title_company_extractor(match: re.Match[str]) -> ParsedSubject | None:
    title = match.group("title").strip()
    company = match.group("company").strip()
    if not title or not company:
        return None
    return ParsedSubject(job_title=title, company_name=company)


@dataclass(frozen=True, slots=True)
class SubjectPattern:
    """A named regex paired with the extractor that reads its groups."""

    name: str
    regex: re.Pattern[str]
    extractor: SubjectExtractor = title_company_extractor

    def apply(self, subject: str) -> ParsedSubject | None:
        match = self.regex.search(subject)
        if match is None:
            return None
        return self.extractor(match)


# Evaluated in order; the first pattern that yields a result wins.
SUBJECT_PATTERNS: tuple[SubjectPattern, ...] = (
    SubjectPattern(
        "application_for",
        re.compile(r"Application for (?P<title>.+?) at (?P<company>.+)$", re.IGNORECASE),
    ),
    SubjectPattern(
        "apply_for",
        re.compile(r"Apply for (?P<title>.+?) at (?P<company>.+)$", re.IGNORECASE),
    ),
    SubjectPattern(
        "application_colon",
        re.compile(r"Application: (?P<title>.+?) - (?P<company>.+)$", re.IGNORECASE),
    ),
    SubjectPattern(
        "trailing_application",
        re.compile(r"(?P<title>.+?) at (?P<company>.+?) - Application", re.IGNORECASE),
    ),
)


class SubjectParser:
    """Parse ``(job_title, company_name)`` out of an email subject."""

    def __init__(self, patterns: Sequence[SubjectPattern] = SUBJECT_PATTERNS) -> None:
        self._patterns = tuple(patterns)
        self._logger = structlog.get_logger(__name__)

    @property
    def patterns(self) -> tuple[SubjectPattern, ...]:
        return self._patterns

    def parse(self, subject: str) -> ParsedSubject | None:
        """Return the parsed subject, or None when no pattern matches."""
        for pattern in self._patterns:
            parsed = pattern.apply(subject or "")
            if parsed is not None:
                self._logger.debug("subject.parsed", pattern=pattern.name)
                return parsed
        self._logger.warning("subject.unmatched", subject=subject)
        return None
