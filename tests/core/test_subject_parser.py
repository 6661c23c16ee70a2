from __future__ import annotations

import re

import pytest

from hrintake.core.classifier import SUBJECT_PATTERNS, ParsedSubject, SubjectParser, SubjectPattern


def test_primary_pattern_extracts_title_and_company():
    parsed = SubjectParser().parse("Application for Backend Engineer at Acme Corp")

    assert parsed == ParsedSubject(job_title="Backend Engineer", company_name="Acme Corp")


@pytest.mark.parametrize(
    ("subject", "title", "company"),
    [
        ("Apply for Product Manager at Hooli", "Product Manager", "Hooli"),
        ("Application: Data Analyst - Globex Inc", "Data Analyst", "Globex Inc"),
        ("Senior Developer at Initech - Application", "Senior Developer", "Initech"),
        ("Fwd: Application for QA Lead at Umbrella", "QA Lead", "Umbrella"),
        ("APPLICATION FOR Site Reliability Engineer AT Wayne Enterprises", "Site Reliability Engineer", "Wayne Enterprises"),
    ],
)
def test_fallback_patterns_and_case_insensitivity(subject: str, title: str, company: str):
    parsed = SubjectParser().parse(subject)

    assert parsed is not None
    assert parsed.job_title == title
    assert parsed.company_name == company


def test_captured_groups_are_trimmed():
    parsed = SubjectParser().parse("Application for   Data Engineer   at  Globex  ")

    assert parsed == ParsedSubject(job_title="Data Engineer", company_name="Globex")


@pytest.mark.parametrize("subject", ["random text with no pattern", "", "Application for"])
def test_unmatched_subject_returns_none(subject: str):
    assert SubjectParser().parse(subject) is None


def test_patterns_are_evaluated_in_priority_order():
    names = [pattern.name for pattern in SUBJECT_PATTERNS]

    assert names == [
        "application_for",
        "apply_for",
        "application_colon",
        "trailing_application",
    ]


def test_each_pattern_is_independently_usable():
    trailing = SUBJECT_PATTERNS[-1]

    assert trailing.apply("Designer at Pixar - Application") == ParsedSubject("Designer", "Pixar")
    assert trailing.apply("Application for Designer at Pixar") is None


def test_custom_pattern_table():
    parser = SubjectParser(
        patterns=[
            SubjectPattern(
                "bracketed",
                re.compile(r"\[(?P<company>[^\]]+)\]\s*(?P<title>.+)$"),
            )
        ]
    )

    assert parser.parse("[Acme] Backend Engineer") == ParsedSubject("Backend Engineer", "Acme")
    assert parser.parse("Application for Backend Engineer at Acme") is None
