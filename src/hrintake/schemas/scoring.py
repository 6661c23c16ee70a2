from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus(str, Enum):
    """Terminal evaluation states derived from the numeric score."""

    SHORTLIST = "SHORTLIST"
    FLAGGED = "FLAGGED"
    REJECTED = "REJECTED"


class ScoringResult(BaseModel):
    """Score, derived status and human-readable reasoning."""

    score: int = Field(ge=0, le=100)
    status: ApplicationStatus
    reasoning: str

    model_config = ConfigDict(extra="forbid", frozen=True)
