"""Candidate scoring with a model path, one bounded retry and a keyword fallback."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import structlog

from ..llm import GenerativeModel, extract_json_object
from ..schemas import ApplicationStatus, ScoringInput, ScoringResult
from .decision import decide_status

PRIMARY_EXCERPT_CHARS = 4000
RETRY_EXCERPT_CHARS = 2000

SKILL_MATCH_POINTS = 70
EXPERIENCE_BONUS = 15
EDUCATION_BONUS = 10

EXPERIENCE_KEYWORDS: tuple[str, ...] = (
    "experience",
    "worked",
    "years",
    "developed",
    "implemented",
    "managed",
)
EDUCATION_KEYWORDS: tuple[str, ...] = (
    "degree",
    "bachelor",
    "master",
    "phd",
    "university",
    "college",
)

SCORING_SYSTEM_INSTRUCTION = (
    "You are an expert HR recruiter. Analyze candidates objectively based ONLY on "
    "skills, experience, and job relevance. NO discrimination on gender, ethnicity, "
    "age, religion, or location. Base score purely on skills, experience, and "
    "relevance. Always return valid JSON."
)
RETRY_SYSTEM_INSTRUCTION = "Return valid JSON only. Score objectively based on skills."


class ScoringState(Enum):
    PRIMARY = "primary"
    RETRY = "retry"
    FALLBACK = "fallback"
    DONE = "done"


# (state, attempt succeeded) -> next state. FALLBACK ends with the keyword score.
_TRANSITIONS: dict[tuple[ScoringState, bool], ScoringState] = {
    (ScoringState.PRIMARY, True): ScoringState.DONE,
    (ScoringState.PRIMARY, False): ScoringState.RETRY,
    (ScoringState.RETRY, True): ScoringState.DONE,
    (ScoringState.RETRY, False): ScoringState.FALLBACK,
}


@dataclass(frozen=True, slots=True)
class Ok:
    result: ScoringResult


@dataclass(frozen=True, slots=True)
class Err:
    reason: str


AttemptResult = Union[Ok, Err]


@dataclass(frozen=True, slots=True)
class SkillMatch:
    """Required skills found verbatim (case-folded) in the resume text."""

    matched: int
    total: int

    @property
    def ratio(self) -> float:
        return self.matched / self.total if self.total else 0.0

    def describe(self) -> str:
        return f"{self.matched}/{self.total}"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def count_skill_matches(cv_text: str, required_skills: list[str]) -> SkillMatch:
    haystack = cv_text.casefold()
    skills = [skill.casefold() for skill in required_skills]
    matched = sum(1 for skill in skills if skill in haystack)
    return SkillMatch(matched=matched, total=len(skills))


def fallback_score(scoring_input: ScoringInput) -> ScoringResult:
    """Deterministic keyword heuristic; identical input always yields identical output."""
    cv_text = scoring_input.cv_text.casefold()
    skills = count_skill_matches(cv_text, scoring_input.job.required_skills)

    score = round_half_up(skills.ratio * SKILL_MATCH_POINTS)
    if any(keyword in cv_text for keyword in EXPERIENCE_KEYWORDS):
        score += EXPERIENCE_BONUS
    if any(keyword in cv_text for keyword in EDUCATION_KEYWORDS):
        score += EDUCATION_BONUS
    score = min(100, score)

    status = decide_status(score)
    matched = skills.describe()
    if status is ApplicationStatus.SHORTLIST:
        reasoning = (
            f"Strong candidate with {matched} required skills matched. "
            "Good experience and qualifications."
        )
    elif status is ApplicationStatus.FLAGGED:
        reasoning = f"Partial match with {matched} required skills. May need additional review."
    else:
        reasoning = (
            f"Weak match with only {matched} required skills. "
            "Does not meet minimum requirements."
        )
    return ScoringResult(score=score, status=status, reasoning=reasoning)


def build_primary_prompt(scoring_input: ScoringInput) -> str:
    job = scoring_input.job
    cv_text = scoring_input.cv_text
    excerpt = cv_text[:PRIMARY_EXCERPT_CHARS]
    if len(cv_text) > PRIMARY_EXCERPT_CHARS:
        excerpt += "..."

    return f"""{SCORING_SYSTEM_INSTRUCTION}

Analyze this candidate for the job position objectively.

JOB TITLE:
{job.title}

JOB DESCRIPTION:
{job.description}

REQUIRED SKILLS:
{", ".join(job.required_skills)}

CANDIDATE CV TEXT:
{excerpt}

INSTRUCTIONS:
1. Analyze the job description and extract key requirements
2. Extract candidate skills from the CV text
3. Compare skill match between required skills and candidate skills
4. Score based on objective criteria: skill match, experience relevance, education alignment
5. NO discrimination: Do NOT consider gender, ethnicity, age, religion, or location
6. Base score purely on: skills, experience, relevance to job requirements

Return JSON only, with this EXACT structure:
{{
  "score": <number 0-100>,
  "status": "SHORTLIST" | "FLAGGED" | "REJECTED",
  "reasoning": "<why this score, which required skills matched, experience relevance>"
}}

MANDATORY SCORING RULES:
- 80-100 -> SHORTLIST (strong match, meets most requirements)
- 50-79 -> FLAGGED (partial match, needs review)
- <50 -> REJECTED (poor match, doesn't meet requirements)"""


def build_retry_prompt(scoring_input: ScoringInput) -> str:
    job = scoring_input.job
    return f"""{RETRY_SYSTEM_INSTRUCTION}

Job: {job.title}
Required Skills: {", ".join(job.required_skills)}
CV: {scoring_input.cv_text[:RETRY_EXCERPT_CHARS]}

Score 0-100 based on skill match. Do not consider gender, ethnicity, age, religion, or location.
Return JSON: {{"score": number, "status": "SHORTLIST"|"FLAGGED"|"REJECTED", "reasoning": "string"}}"""


def result_from_payload(payload: dict[str, Any], skills: SkillMatch) -> AttemptResult:
    """Validate a model payload; the model's own status is never trusted."""
    raw_score = payload.get("score")
    if isinstance(raw_score, bool) or raw_score is None:
        return Err("missing numeric score")
    try:
        value = float(raw_score)
    except OverflowError:
        return Err("score out of float range")
    except (TypeError, ValueError):
        return Err(f"non-numeric score {raw_score!r}")
    if not math.isfinite(value):
        return Err(f"non-finite score {raw_score!r}")

    score = clamp_score(value)
    status = decide_status(score)

    reasoning = payload.get("reasoning")
    if not isinstance(reasoning, str) or not reasoning.strip():
        reasoning = "No reasoning provided."
    reasoning = f"{reasoning.strip()} (Required skills found in CV: {skills.describe()}.)"

    proposed = payload.get("status")
    if isinstance(proposed, str) and proposed.strip().upper() != status.value:
        reasoning += f" Model proposed {proposed.strip()}; status set to {status.value} by score thresholds."

    return Ok(ScoringResult(score=score, status=status, reasoning=reasoning))


class ScoringEngine:
    """Scores a candidate against job requirements.

    Runs PRIMARY -> RETRY -> FALLBACK with exactly one sequential retry. Without a
    model the engine goes straight to FALLBACK for its whole lifetime.
    """

    def __init__(self, model: GenerativeModel | None = None) -> None:
        self._model = model
        self._logger = structlog.get_logger(__name__)

    @property
    def uses_model(self) -> bool:
        return self._model is not None

    async def score(self, scoring_input: ScoringInput) -> ScoringResult:
        if self._model is None:
            self._logger.info("scoring.model_unavailable", job_title=scoring_input.job.title)
            return self._fallback(scoring_input)

        skills = count_skill_matches(scoring_input.cv_text, scoring_input.job.required_skills)
        state = ScoringState.PRIMARY
        attempt: AttemptResult = Err("not attempted")
        while state in (ScoringState.PRIMARY, ScoringState.RETRY):
            prompt = (
                build_primary_prompt(scoring_input)
                if state is ScoringState.PRIMARY
                else build_retry_prompt(scoring_input)
            )
            attempt = await self._attempt(self._model, prompt, skills)
            if isinstance(attempt, Ok):
                self._logger.info(
                    "scoring.model_scored",
                    attempt=state.value,
                    score=attempt.result.score,
                    status=attempt.result.status.value,
                )
            else:
                self._logger.warning("scoring.attempt_failed", attempt=state.value, reason=attempt.reason)
            state = _TRANSITIONS[(state, isinstance(attempt, Ok))]

        if isinstance(attempt, Ok):
            return attempt.result
        return self._fallback(scoring_input)

    def _fallback(self, scoring_input: ScoringInput) -> ScoringResult:
        result = fallback_score(scoring_input)
        self._logger.info("scoring.fallback", score=result.score, status=result.status.value)
        return result

    @staticmethod
    async def _attempt(model: GenerativeModel, prompt: str, skills: SkillMatch) -> AttemptResult:
        try:
            text = await model.generate(prompt)
        except Exception as exc:  # noqa: BLE001 - any model failure moves to the next state
            return Err(f"model error: {exc}")
        if not text or not text.strip():
            return Err("empty response")
        payload = extract_json_object(text)
        if payload is None:
            return Err("no JSON object in response")
        return result_from_payload(payload, skills)


__all__ = [
    "AttemptResult",
    "Err",
    "Ok",
    "ScoringEngine",
    "ScoringState",
    "SkillMatch",
    "build_primary_prompt",
    "build_retry_prompt",
    "count_skill_matches",
    "fallback_score",
    "result_from_payload",
]
