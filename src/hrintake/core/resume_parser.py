"""Model-backed resume parsing with an unconditional empty fallback."""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from ..llm import GenerativeModel, extract_json_object
from ..schemas import ParsedResume

RESUME_SYSTEM_INSTRUCTION = """You are a resume parsing engine. Extract JSON with keys:
personal{name,email,phone}, education[{school,degree,year}], experience[{company,role,start,end,summary}],
skills[string[]], links{github,linkedin,portfolio[string[]]}, awards[string[]], projects[{name,description,link}].
Return ONLY strict JSON, no markdown formatting."""


def build_resume_prompt(text: str) -> str:
    return f"{RESUME_SYSTEM_INSTRUCTION}\n\nResume Text:\n{text}\n---\nExtract the structured JSON now."


class ResumeParser:
    """Convert free resume text into a :class:`ParsedResume`.

    The caller is responsible for truncating ``text``. :meth:`parse` never raises;
    every failure yields :meth:`ParsedResume.empty`.
    """

    def __init__(self, model: GenerativeModel | None = None) -> None:
        self._model = model
        self._logger = structlog.get_logger(__name__)

    async def parse(self, text: str) -> ParsedResume:
        if self._model is None:
            self._logger.info("resume_parser.model_unavailable")
            return ParsedResume.empty()
        if not text or not text.strip():
            self._logger.info("resume_parser.empty_input")
            return ParsedResume.empty()

        try:
            raw = await self._model.generate(build_resume_prompt(text))
        except Exception as exc:  # noqa: BLE001 - parsing must never raise
            self._logger.warning("resume_parser.model_failed", error=str(exc))
            return ParsedResume.empty()

        payload = extract_json_object(raw)
        if payload is None:
            self._logger.warning("resume_parser.no_json", response_chars=len(raw or ""))
            return ParsedResume.empty()

        try:
            parsed = ParsedResume.model_validate(payload)
        except ValidationError as exc:
            self._logger.warning("resume_parser.invalid_payload", errors=exc.error_count())
            return ParsedResume.empty()

        self._logger.info(
            "resume_parser.parsed",
            skills=len(parsed.skills),
            experience=len(parsed.experience),
            education=len(parsed.education),
        )
        return parsed
