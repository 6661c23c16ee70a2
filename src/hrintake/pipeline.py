"""Intake pipeline assembly and execution."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pendulum
import structlog

from . import __version__
from .core import EmailClassifier, ResumeParser, ScoringEngine
from .db import ApplicationRepository, JobPostingRepository
from .errors import JobPostingNotFoundError
from .pdf_utils import resolve_resume_text
from .schemas import (
    Application,
    ClassificationResult,
    InboundEmail,
    ParsedResume,
    ScoringInput,
    ScoringResult,
)


@dataclass(slots=True)
class IntakeOutcome:
    """Everything produced while processing one inbound email."""

    classification: ClassificationResult
    application: Application | None = None
    parsed_resume: ParsedResume | None = None
    scoring: ScoringResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "classification": self.classification.summary(),
            "application": self.application.model_dump(mode="json") if self.application else None,
            "parsed_resume": self.parsed_resume.model_dump(mode="json") if self.parsed_resume else None,
            "scoring": self.scoring.model_dump(mode="json") if self.scoring else None,
        }


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")


class IntakePipeline:
    """End-to-end intake for a single email.

    Each call is an independent unit of work; no state is shared between calls
    beyond the injected collaborators.
    """

    def __init__(
        self,
        *,
        classifier: EmailClassifier,
        resume_parser: ResumeParser,
        scoring_engine: ScoringEngine,
        applications: ApplicationRepository,
        job_postings: JobPostingRepository,
        max_resume_chars: int = 20_000,
    ) -> None:
        self._classifier = classifier
        self._resume_parser = resume_parser
        self._scoring = scoring_engine
        self._applications = applications
        self._job_postings = job_postings
        self._max_resume_chars = max_resume_chars
        self._logger = structlog.get_logger(__name__)

    async def process(
        self,
        email: InboundEmail,
        *,
        resume_text: str | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> IntakeOutcome | None:
        """Classify, persist, parse and score one email.

        Returns None when classification hit an internal fault. Unmatched emails
        return an outcome without an application. A vanished application row at
        scoring time raises :class:`~hrintake.errors.ApplicationNotFoundError`.
        """
        classification = await self._classifier.classify_email(email)
        if classification is None:
            self._logger.error("intake.classification_failed", subject=email.subject)
            return None

        if not classification.matched:
            outcome = IntakeOutcome(classification=classification)
            self._audit(audit_logger, outcome)
            return outcome

        if resume_text is None:
            resume_text = resolve_resume_text(classification.attachments, email.body)
        resume_text = resume_text[: self._max_resume_chars]
        parsed_resume = await self._resume_parser.parse(resume_text)

        application = await self._applications.create(
            job_posting_id=classification.job_posting_id,
            company_id=classification.company_id,
            candidate_name=classification.candidate_name,
            email=classification.candidate_email,
            resume_url=_first_attachment_url(classification),
            phone=parsed_resume.personal.phone,
        )

        job = await self._job_postings.get(classification.job_posting_id)
        if job is None:
            raise JobPostingNotFoundError(classification.job_posting_id)

        scoring = await self._scoring.score(
            ScoringInput(job=job.requirements(), cv_text=resume_text)
        )
        application = await self._applications.update_scoring(
            application_id=application.application_id,
            ai_score=scoring.score,
            ai_status=scoring.status,
            reasoning=scoring.reasoning,
            parsed_resume_json=parsed_resume.model_dump(mode="json"),
        )

        self._logger.info(
            "intake.result",
            application_id=application.application_id,
            job_posting_id=application.job_posting_id,
            score=scoring.score,
            status=scoring.status.value,
        )
        outcome = IntakeOutcome(
            classification=classification,
            application=application,
            parsed_resume=parsed_resume,
            scoring=scoring,
        )
        self._audit(audit_logger, outcome)
        return outcome

    @staticmethod
    def _audit(audit_logger: AuditLogger | None, outcome: IntakeOutcome) -> None:
        if audit_logger is None:
            return
        classification = outcome.classification
        audit_logger.append(
            {
                "timestamp": pendulum.now("UTC").to_iso8601_string(),
                "app_version": __version__,
                "matched": classification.matched,
                "candidate_email": classification.candidate_email,
                "candidate_name": classification.candidate_name,
                "job_posting_id": classification.job_posting_id,
                "application_id": outcome.application.application_id if outcome.application else None,
                "score": outcome.scoring.score if outcome.scoring else None,
                "status": outcome.scoring.status.value if outcome.scoring else None,
            }
        )


def _first_attachment_url(classification: ClassificationResult) -> str | None:
    for attachment in classification.attachments:
        if attachment.url:
            return attachment.url
    return None
