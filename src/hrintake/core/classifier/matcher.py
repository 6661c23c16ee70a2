"""Resolve a parsed subject to a stored job posting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import structlog


@dataclass(frozen=True, slots=True)
class JobMatch:
    job_posting_id: str
    company_id: str


@runtime_checkable
class JobPostingLookup(Protocol):
    """Persistence lookup used by :class:`JobMatcher`."""

    async def find_by_title_and_company(
        self, job_title: str, company_name: str
    ) -> JobMatch | None:
        """Return the first posting whose title and company match case-insensitively."""


class JobMatcher:
    """Case-insensitive exact match of job title and company name; no fuzzy matching."""

    def __init__(self, lookup: JobPostingLookup) -> None:
        self._lookup = lookup
        self._logger = structlog.get_logger(__name__)

    async def match(self, job_title: str, company_name: str) -> JobMatch | None:
        if not job_title.strip() or not company_name.strip():
            return None
        found = await self._lookup.find_by_title_and_company(job_title.strip(), company_name.strip())
        if found is None:
            self._logger.warning("job_matcher.no_match", job_title=job_title, company_name=company_name)
            return None
        self._logger.debug(
            "job_matcher.matched",
            job_posting_id=found.job_posting_id,
            company_id=found.company_id,
        )
        return found
