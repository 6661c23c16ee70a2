from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Company(BaseModel):
    """Hiring company."""

    company_id: str
    company_name: str

    model_config = ConfigDict(extra="forbid", from_attributes=True)


class JobRequirements(BaseModel):
    """Job view consumed by the scoring engine."""

    title: str
    description: str = ""
    required_skills: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class JobPosting(BaseModel):
    """Open position on the job board."""

    job_posting_id: str
    company_id: str
    job_title: str
    description: str = ""
    required_skills: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", from_attributes=True)

    def requirements(self) -> JobRequirements:
        return JobRequirements(
            title=self.job_title,
            description=self.description,
            required_skills=list(self.required_skills),
        )


class ScoringInput(BaseModel):
    """Job requirements paired with resume text."""

    job: JobRequirements
    cv_text: str = ""

    model_config = ConfigDict(extra="forbid")
