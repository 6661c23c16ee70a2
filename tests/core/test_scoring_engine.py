from __future__ import annotations

import asyncio
import json

import pytest

from hrintake.core.decision import decide_status
from hrintake.core.scoring import (
    ScoringEngine,
    build_primary_prompt,
    build_retry_prompt,
    count_skill_matches,
    fallback_score,
)
from hrintake.schemas import ApplicationStatus, JobRequirements, ScoringInput


def build_input(cv_text: str, skills: list[str] | None = None, **job_kwargs) -> ScoringInput:
    job = {
        "title": "Backend Engineer",
        "description": "Build and run APIs.",
        "required_skills": ["Python", "SQL", "Docker"] if skills is None else skills,
    }
    job.update(job_kwargs)
    return ScoringInput(job=JobRequirements(**job), cv_text=cv_text)


def model_reply(score, status: str = "FLAGGED", reasoning: str = "Solid backend background.") -> str:
    return json.dumps({"score": score, "status": status, "reasoning": reasoning})


# Fallback path


def test_fallback_partial_match_with_bonuses():
    scoring_input = build_input(
        "I have 5 years experience with python and sql. Bachelor degree in CS."
    )

    result = fallback_score(scoring_input)

    # round(2/3 * 70) = 47, +15 experience, +10 education
    assert result.score == 72
    assert result.status is ApplicationStatus.FLAGGED
    assert "2/3" in result.reasoning


def test_fallback_rounds_half_up():
    scoring_input = build_input("python sql docker", skills=["python", "sql", "docker", "kubernetes"])

    result = fallback_score(scoring_input)

    assert result.score == 53
    assert result.status is ApplicationStatus.FLAGGED


def test_fallback_zero_required_skills_has_zero_base():
    assert fallback_score(build_input("nothing relevant", skills=[])).score == 0
    with_bonuses = fallback_score(build_input("Worked at a university", skills=[]))
    assert with_bonuses.score == 25
    assert with_bonuses.status is ApplicationStatus.REJECTED
    assert "0/0" in with_bonuses.reasoning


def test_fallback_full_match_shortlists():
    scoring_input = build_input("Developed Python services, SQL tuning, Docker. Master of Science.")

    result = fallback_score(scoring_input)

    assert result.score == 95
    assert result.status is ApplicationStatus.SHORTLIST


def test_fallback_is_case_insensitive_substring_match():
    assert count_skill_matches("POSTGRESQL and JavaScript", ["sql", "java", "go"]).matched == 2


@pytest.mark.parametrize(
    "cv_text",
    [
        "",
        "python",
        "experience degree",
        "PYTHON SQL DOCKER years university " * 50,
        "managed implemented developed worked phd college",
    ],
)
def test_fallback_scores_stay_in_range_and_are_deterministic(cv_text: str):
    scoring_input = build_input(cv_text)

    first = fallback_score(scoring_input)
    second = fallback_score(build_input(cv_text))

    assert 0 <= first.score <= 100
    assert first == second
    assert first.status is decide_status(first.score)


def test_engine_without_model_uses_fallback():
    scoring_input = build_input("python sql docker experience degree")
    engine = ScoringEngine(model=None)

    result = asyncio.run(engine.score(scoring_input))

    assert engine.uses_model is False
    assert result == fallback_score(scoring_input)


# Model path


def test_model_score_is_clamped_rounded_and_status_recomputed(stub_model):
    model = stub_model(
        "Here is my evaluation:\n```json\n"
        + model_reply(91.6, status="FLAGGED", reasoning="Strong Python and SQL.")
        + "\n```"
    )
    engine = ScoringEngine(model=model)

    result = asyncio.run(engine.score(build_input("python sql")))

    assert result.score == 92
    assert result.status is ApplicationStatus.SHORTLIST
    assert result.reasoning.startswith("Strong Python and SQL.")
    assert "2/3" in result.reasoning
    assert "Model proposed FLAGGED" in result.reasoning
    assert len(model.prompts) == 1


@pytest.mark.parametrize(
    ("raw_score", "expected"),
    [(140, 100), (-5, 0), (49.4, 49), (49.5, 50), (79.5, 80), ("77", 77)],
)
def test_model_scores_map_consistently(stub_model, raw_score, expected: int):
    engine = ScoringEngine(model=stub_model(model_reply(raw_score)))

    result = asyncio.run(engine.score(build_input("python")))

    assert result.score == expected
    assert result.status is decide_status(expected)


def test_agreeing_model_status_adds_no_override_note(stub_model):
    engine = ScoringEngine(model=stub_model(model_reply(65, status="FLAGGED")))

    result = asyncio.run(engine.score(build_input("python")))

    assert result.status is ApplicationStatus.FLAGGED
    assert "Model proposed" not in result.reasoning


def test_primary_failure_retries_once_with_short_prompt(stub_model):
    model = stub_model(RuntimeError("timeout"), model_reply(65))
    engine = ScoringEngine(model=model)

    result = asyncio.run(engine.score(build_input("python sql")))

    assert result.score == 65
    assert result.status is ApplicationStatus.FLAGGED
    assert len(model.prompts) == 2
    assert "JOB DESCRIPTION" in model.prompts[0]
    assert "JOB DESCRIPTION" not in model.prompts[1]
    assert "Required Skills: Python, SQL, Docker" in model.prompts[1]


def test_both_attempts_failing_falls_back_after_exactly_two_calls(stub_model):
    model = stub_model("not json at all", '{"score": "high"}', model_reply(99))
    engine = ScoringEngine(model=model)
    scoring_input = build_input("python experience")

    result = asyncio.run(engine.score(scoring_input))

    assert result == fallback_score(scoring_input)
    assert len(model.prompts) == 2


def test_missing_score_counts_as_failure(stub_model):
    model = stub_model('{"status": "SHORTLIST", "reasoning": "great"}', model_reply(30))
    engine = ScoringEngine(model=model)

    result = asyncio.run(engine.score(build_input("python")))

    assert result.score == 30
    assert result.status is ApplicationStatus.REJECTED


def test_empty_reasoning_gets_placeholder(stub_model):
    engine = ScoringEngine(model=stub_model('{"score": 55}'))

    result = asyncio.run(engine.score(build_input("python")))

    assert result.reasoning.startswith("No reasoning provided.")


def test_prompts_limit_cv_excerpt():
    scoring_input = build_input("a" * 5000)

    primary = build_primary_prompt(scoring_input)
    retry = build_retry_prompt(scoring_input)

    assert "a" * 4000 + "..." in primary
    assert "a" * 4001 not in primary
    assert "a" * 2000 in retry
    assert "a" * 2001 not in retry


def test_primary_prompt_excludes_protected_attributes():
    prompt = build_primary_prompt(build_input("python"))

    for attribute in ("gender", "ethnicity", "age", "religion", "location"):
        assert attribute in prompt
    assert "JSON" in prompt


def test_deeply_nested_reply_counts_as_failed_attempt(stub_model):
    nested = '{"a":' * 100_000 + "1" + "}" * 100_000
    model = stub_model(nested, model_reply(60))
    engine = ScoringEngine(model=model)

    result = asyncio.run(engine.score(build_input("python")))

    assert result.score == 60
    assert result.status is ApplicationStatus.FLAGGED
    assert len(model.prompts) == 2


def test_score_beyond_float_range_counts_as_failed_attempt(stub_model):
    model = stub_model('{"score": ' + "9" * 400 + "}", model_reply(60))
    engine = ScoringEngine(model=model)

    result = asyncio.run(engine.score(build_input("python")))

    assert result.score == 60
    assert len(model.prompts) == 2


def test_unusable_replies_on_both_attempts_fall_back(stub_model):
    nested = '{"a":' * 100_000 + "1" + "}" * 100_000
    model = stub_model(nested, '{"score": ' + "9" * 400 + "}")
    engine = ScoringEngine(model=model)
    scoring_input = build_input("python experience")

    result = asyncio.run(engine.score(scoring_input))

    assert result == fallback_score(scoring_input)
