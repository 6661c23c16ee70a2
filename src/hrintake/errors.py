"""Exception types raised by the intake system."""

from __future__ import annotations


class IntakeError(Exception):
    """Base class for intake failures surfaced to callers."""


class ConfigError(IntakeError, ValueError):
    """Raised when configuration input is malformed."""


class ApplicationNotFoundError(IntakeError, LookupError):
    """Raised when an application row is missing at update time.

    Updates are keyed by ``application_id``; a missing row is never retried because
    the identifier may since have been reused for a different candidate.
    """

    def __init__(self, application_id: str):
        super().__init__(f"Application not found: {application_id!r}")
        self.application_id = application_id


class JobPostingNotFoundError(IntakeError, LookupError):
    """Raised when a matched job posting cannot be loaded for scoring."""

    def __init__(self, job_posting_id: str):
        super().__init__(f"Job posting not found: {job_posting_id!r}")
        self.job_posting_id = job_posting_id


class ModelCallError(IntakeError):
    """Raised by model clients when a generation call yields no usable text."""


__all__ = [
    "IntakeError",
    "ConfigError",
    "ApplicationNotFoundError",
    "JobPostingNotFoundError",
    "ModelCallError",
]
