"""Core intake components: classification, resume parsing, scoring and decisions."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .classifier import EmailClassifier, JobMatch, JobMatcher, SubjectParser
from .decision import decide_status
from .resume_parser import ResumeParser
from .scoring import ScoringEngine, fallback_score

__all__ = [
    "EmailClassifier",
    "JobMatch",
    "JobMatcher",
    "ResumeParser",
    "ScoringEngine",
    "SubjectParser",
    "decide_status",
    "fallback_score",
]
