"""Email classification: subject parsing, job matching and candidate identity."""

from __future__ import annotations

import structlog

from ...schemas import ClassificationResult, InboundEmail
from .identity import UNKNOWN_CANDIDATE_NAME, extract_candidate_email, extract_candidate_name
from .matcher import JobMatch, JobMatcher, JobPostingLookup
from .subject import SUBJECT_PATTERNS, ParsedSubject, SubjectParser, SubjectPattern


class EmailClassifier:
    """Classify a forwarded application email to a job posting and company."""

    def __init__(self, *, matcher: JobMatcher, subject_parser: SubjectParser | None = None) -> None:
        self._matcher = matcher
        self._subject_parser = subject_parser or SubjectParser()
        self._logger = structlog.get_logger(__name__)

    async def classify_email(self, email: InboundEmail) -> ClassificationResult | None:
        """Return a classification; None only on an unexpected internal fault.

        Unparseable subjects and unknown postings produce ``matched=False`` results
        with the candidate identity still filled in.
        """
        try:
            candidate_email = extract_candidate_email(email.from_)
            candidate_name = extract_candidate_name(email.from_, email.body)

            parsed = self._subject_parser.parse(email.subject)
            match = None
            if parsed is not None:
                match = await self._matcher.match(parsed.job_title, parsed.company_name)

            if match is None:
                self._logger.warning(
                    "classifier.unmatched",
                    subject=email.subject,
                    candidate_email=candidate_email,
                    subject_parsed=parsed is not None,
                )
                return ClassificationResult(
                    candidate_email=candidate_email,
                    candidate_name=candidate_name,
                    attachments=list(email.attachments),
                    matched=False,
                )

            self._logger.info(
                "classifier.matched",
                job_posting_id=match.job_posting_id,
                company_id=match.company_id,
                candidate_email=candidate_email,
            )
            return ClassificationResult(
                job_posting_id=match.job_posting_id,
                company_id=match.company_id,
                candidate_email=candidate_email,
                candidate_name=candidate_name,
                attachments=list(email.attachments),
                matched=True,
            )
        except Exception:  # noqa: BLE001 - callers receive None on internal faults
            self._logger.exception("classifier.failed", subject=email.subject)
            return None


__all__ = [
    "EmailClassifier",
    "JobMatch",
    "JobMatcher",
    "JobPostingLookup",
    "ParsedSubject",
    "SUBJECT_PATTERNS",
    "SubjectParser",
    "SubjectPattern",
    "UNKNOWN_CANDIDATE_NAME",
    "extract_candidate_email",
    "extract_candidate_name",
]
