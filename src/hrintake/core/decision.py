"""Score to status mapping shared by every scoring path."""

from __future__ import annotations

from ..schemas import ApplicationStatus

SHORTLIST_MIN_SCORE = 80
FLAGGED_MIN_SCORE = 50


def decide_status(score: int) -> ApplicationStatus:
    """Map a 0-100 score to its status band; band floors are inclusive."""
    if score >= SHORTLIST_MIN_SCORE:
        return ApplicationStatus.SHORTLIST
    if score >= FLAGGED_MIN_SCORE:
        return ApplicationStatus.FLAGGED
    return ApplicationStatus.REJECTED
