from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ResumeSection(BaseModel):
    # Model output is loosely typed: numbers become strings, unknown keys are dropped.
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class PersonalInfo(_ResumeSection):
    """Candidate contact details."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None


class EducationEntry(_ResumeSection):
    """Structured education history entry."""

    school: str | None = None
    degree: str | None = None
    year: str | None = None


class ExperienceEntry(_ResumeSection):
    """Employment history entry."""

    company: str | None = None
    role: str | None = None
    start: str | None = None
    end: str | None = None
    summary: str | None = None


class ResumeLinks(_ResumeSection):
    """Profile and portfolio links."""

    github: str | None = None
    linkedin: str | None = None
    portfolio: list[str] = Field(default_factory=list)

    @field_validator("portfolio", mode="before")
    @classmethod
    def _coerce_portfolio(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class ProjectEntry(_ResumeSection):
    """Side or professional project."""

    name: str | None = None
    description: str | None = None
    link: str | None = None


class ParsedResume(_ResumeSection):
    """Structured resume record; every field is optional."""

    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    education: list[EducationEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    links: ResumeLinks = Field(default_factory=ResumeLinks)
    awards: list[str] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)

    @field_validator("education", "experience", "skills", "awards", "projects", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("personal", "links", mode="before")
    @classmethod
    def _null_section(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def empty(cls) -> "ParsedResume":
        """Return the well-formed empty record used whenever parsing fails."""
        return cls()

    def is_empty(self) -> bool:
        return self == ParsedResume.empty()
