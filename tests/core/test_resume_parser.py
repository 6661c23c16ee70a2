from __future__ import annotations

import asyncio
import json

from hrintake.core.resume_parser import ResumeParser, build_resume_prompt
from hrintake.schemas import ParsedResume

RESUME_PAYLOAD = {
    "personal": {"name": "Jane Doe", "email": "jane@example.com", "phone": "+1 555 0100"},
    "education": [{"school": "State University", "degree": "BSc Computer Science", "year": 2019}],
    "experience": [
        {
            "company": "Initech",
            "role": "Backend Engineer",
            "start": "2019",
            "end": None,
            "summary": "Built billing APIs in Python.",
        }
    ],
    "skills": ["Python", "SQL"],
    "links": {"github": "https://github.com/jane", "linkedin": None, "portfolio": "https://jane.dev"},
    "awards": [],
    "projects": [{"name": "pgwatch", "description": "Query monitor", "link": None}],
}


def test_parse_without_model_returns_empty():
    parsed = asyncio.run(ResumeParser(model=None).parse("Jane Doe, Python developer"))

    assert parsed.is_empty()


def test_blank_text_skips_model_call(stub_model):
    model = stub_model(json.dumps(RESUME_PAYLOAD))

    parsed = asyncio.run(ResumeParser(model=model).parse("   \n"))

    assert parsed == ParsedResume.empty()
    assert model.prompts == []


def test_model_failure_returns_empty(stub_model):
    model = stub_model(RuntimeError("quota exceeded"))

    parsed = asyncio.run(ResumeParser(model=model).parse("Jane Doe"))

    assert parsed.is_empty()
    assert len(model.prompts) == 1


def test_parses_prose_wrapped_json(stub_model):
    model = stub_model("Sure! Here it is:\n```json\n" + json.dumps(RESUME_PAYLOAD) + "\n```")

    parsed = asyncio.run(ResumeParser(model=model).parse("Jane Doe resume text"))

    assert parsed.personal.name == "Jane Doe"
    assert parsed.personal.phone == "+1 555 0100"
    assert parsed.education[0].year == "2019"
    assert parsed.experience[0].end is None
    assert parsed.skills == ["Python", "SQL"]
    assert parsed.links.portfolio == ["https://jane.dev"]
    assert parsed.projects[0].name == "pgwatch"
    assert not parsed.is_empty()


def test_null_sections_become_empty(stub_model):
    payload = {"personal": None, "education": None, "skills": ["Go"], "links": None, "projects": None}
    model = stub_model(json.dumps(payload))

    parsed = asyncio.run(ResumeParser(model=model).parse("Go developer"))

    assert parsed.skills == ["Go"]
    assert parsed.education == []
    assert parsed.projects == []
    assert parsed.personal.name is None
    assert parsed.links.portfolio == []


def test_response_without_json_returns_empty(stub_model):
    model = stub_model("I could not find a resume in this text.")

    parsed = asyncio.run(ResumeParser(model=model).parse("hello"))

    assert parsed.is_empty()


def test_invalid_payload_shape_returns_empty(stub_model):
    model = stub_model(json.dumps({"skills": "Python, SQL"}))

    parsed = asyncio.run(ResumeParser(model=model).parse("Python developer"))

    assert parsed.is_empty()


def test_text_is_passed_through_untruncated(stub_model):
    text = "x" * 30_000
    model = stub_model(json.dumps({"skills": []}))

    asyncio.run(ResumeParser(model=model).parse(text))

    assert text in model.prompts[0]
    assert model.prompts[0] == build_resume_prompt(text)
    assert model.prompts[0].endswith("Extract the structured JSON now.")


def test_deeply_nested_reply_returns_empty(stub_model):
    model = stub_model('{"a":' * 100_000 + "1" + "}" * 100_000)

    parsed = asyncio.run(ResumeParser(model=model).parse("resume"))

    assert parsed.is_empty()
