"""Pydantic schema definitions shared across the intake pipeline."""

from __future__ import annotations

from .application import Application
from .email import Attachment, ClassificationResult, InboundEmail
from .job import Company, JobPosting, JobRequirements, ScoringInput
from .resume import (
    EducationEntry,
    ExperienceEntry,
    ParsedResume,
    PersonalInfo,
    ProjectEntry,
    ResumeLinks,
)
from .scoring import ApplicationStatus, ScoringResult

__all__ = [
    "Application",
    "ApplicationStatus",
    "Attachment",
    "ClassificationResult",
    "Company",
    "EducationEntry",
    "ExperienceEntry",
    "InboundEmail",
    "JobPosting",
    "JobRequirements",
    "ParsedResume",
    "PersonalInfo",
    "ProjectEntry",
    "ResumeLinks",
    "ScoringInput",
    "ScoringResult",
]
