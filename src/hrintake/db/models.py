"""SQLAlchemy mappings for companies, job postings and applications."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

import pendulum
from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return pendulum.now("UTC")


class CompanyRecord(Base):
    __tablename__ = "companies"

    company_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)


class JobPostingRecord(Base):
    __tablename__ = "job_postings"

    job_posting_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.company_id"), nullable=False, index=True
    )
    job_title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    required_skills: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)


class ApplicationRecord(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_posting_id", "email", name="uq_applications_job_posting_email"),
    )

    application_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    job_posting_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("job_postings.job_posting_id"), nullable=False, index=True
    )
    company_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("companies.company_id"))
    candidate_name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64))
    resume_url: Mapped[str | None] = mapped_column(Text)
    parsed_resume_json: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    ai_score: Mapped[int | None] = mapped_column(Integer)
    ai_status: Mapped[str | None] = mapped_column(String(16))
    reasoning: Mapped[str | None] = mapped_column(Text)
    interview_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    interview_link: Mapped[str | None] = mapped_column(Text)
    interview_status: Mapped[str | None] = mapped_column(String(32))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
