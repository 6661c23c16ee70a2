"""Inbound applicant intake: classification, resume parsing, scoring and persistence."""

__version__ = "0.1.0"
