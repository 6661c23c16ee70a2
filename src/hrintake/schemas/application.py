from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from .scoring import ApplicationStatus


class Application(BaseModel):
    """Persisted application read model."""

    application_id: str
    job_posting_id: str
    company_id: str | None = None
    candidate_name: str | None = None
    email: str
    phone: str | None = None
    resume_url: str | None = None
    parsed_resume_json: dict[str, Any] | None = None
    ai_score: int | None = None
    ai_status: ApplicationStatus | None = None
    reasoning: str | None = None
    interview_time: datetime | None = None
    interview_link: str | None = None
    interview_status: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
