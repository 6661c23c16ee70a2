"""Persistence operations for job postings and applications."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.classifier.matcher import JobMatch
from ..errors import ApplicationNotFoundError
from ..schemas import Application, ApplicationStatus, Company, JobPosting
from .models import ApplicationRecord, CompanyRecord, JobPostingRecord, new_id, utcnow

INTERVIEW_SCHEDULED = "SCHEDULED"

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class JobPostingRepository:
    """Read access to job postings and their companies."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_title_and_company(
        self, job_title: str, company_name: str
    ) -> JobMatch | None:
        stmt = (
            select(JobPostingRecord.job_posting_id, JobPostingRecord.company_id)
            .join(CompanyRecord, CompanyRecord.company_id == JobPostingRecord.company_id)
            .where(
                func.lower(JobPostingRecord.job_title) == func.lower(job_title),
                func.lower(CompanyRecord.company_name) == func.lower(company_name),
            )
            .limit(1)
        )
        async with self._session_factory() as session:
            row = (await session.execute(stmt)).first()
        if row is None:
            return None
        return JobMatch(job_posting_id=row.job_posting_id, company_id=row.company_id)

    async def get(self, job_posting_id: str) -> JobPosting | None:
        async with self._session_factory() as session:
            record = await session.get(JobPostingRecord, job_posting_id)
            return JobPosting.model_validate(record) if record else None

    async def add_company(self, company_name: str, *, company_id: str | None = None) -> Company:
        async with self._session_factory() as session:
            record = CompanyRecord(company_id=company_id or new_id(), company_name=company_name)
            session.add(record)
            await session.commit()
            return Company.model_validate(record)

    async def add_job_posting(
        self,
        *,
        company_id: str,
        job_title: str,
        description: str = "",
        required_skills: list[str] | None = None,
        job_posting_id: str | None = None,
    ) -> JobPosting:
        async with self._session_factory() as session:
            record = JobPostingRecord(
                job_posting_id=job_posting_id or new_id(),
                company_id=company_id,
                job_title=job_title,
                description=description,
                required_skills=list(required_skills or []),
            )
            session.add(record)
            await session.commit()
            return JobPosting.model_validate(record)


class ApplicationRepository:
    """Application store keyed by ``(job_posting_id, email)``.

    ``create`` is an atomic upsert so concurrent submissions for the same pair never
    produce duplicates; the last write wins for the updated fields.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._logger = structlog.get_logger(__name__)

    async def create(
        self,
        *,
        job_posting_id: str,
        company_id: str,
        candidate_name: str | None,
        email: str,
        resume_url: str | None = None,
        phone: str | None = None,
    ) -> Application:
        values = {
            "application_id": new_id(),
            "job_posting_id": job_posting_id,
            "company_id": company_id,
            "candidate_name": candidate_name,
            "email": email,
            "resume_url": resume_url or None,
            "phone": phone or None,
            "created_at": utcnow(),
        }
        async with self._session_factory() as session:
            insert = _UPSERT_INSERTS[session.get_bind().dialect.name]
            stmt = insert(ApplicationRecord).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[ApplicationRecord.job_posting_id, ApplicationRecord.email],
                set_={
                    "candidate_name": stmt.excluded.candidate_name,
                    "resume_url": stmt.excluded.resume_url,
                    "phone": stmt.excluded.phone,
                },
            )
            record = await session.scalar(
                stmt.returning(ApplicationRecord),
                execution_options={"populate_existing": True},
            )
            application = Application.model_validate(record)
            await session.commit()

        self._logger.info(
            "applications.upserted",
            application_id=application.application_id,
            job_posting_id=job_posting_id,
            email=email,
        )
        return application

    async def update_scoring(
        self,
        *,
        application_id: str,
        ai_score: int,
        ai_status: ApplicationStatus,
        reasoning: str,
        parsed_resume_json: dict[str, Any] | None = None,
    ) -> Application:
        changes: dict[str, Any] = {
            "ai_score": ai_score,
            "ai_status": ApplicationStatus(ai_status).value,
            "reasoning": reasoning,
        }
        # Keep the stored resume when none is supplied.
        if parsed_resume_json is not None:
            changes["parsed_resume_json"] = parsed_resume_json
        return await self._update(application_id, changes)

    async def update_parsed_resume(
        self, *, application_id: str, parsed_resume_json: dict[str, Any]
    ) -> Application:
        return await self._update(application_id, {"parsed_resume_json": parsed_resume_json})

    async def schedule_interview(
        self, *, application_id: str, interview_time: datetime, interview_link: str
    ) -> Application:
        return await self._update(
            application_id,
            {
                "interview_time": interview_time,
                "interview_link": interview_link,
                "interview_status": INTERVIEW_SCHEDULED,
            },
        )

    async def find_by_id(self, application_id: str) -> Application | None:
        async with self._session_factory() as session:
            record = await session.get(ApplicationRecord, application_id)
            return Application.model_validate(record) if record else None

    async def find_by_job(self, job_posting_id: str) -> list[Application]:
        stmt = (
            select(ApplicationRecord)
            .where(ApplicationRecord.job_posting_id == job_posting_id)
            .order_by(
                ApplicationRecord.ai_score.desc().nulls_last(),
                ApplicationRecord.created_at.asc(),
            )
        )
        async with self._session_factory() as session:
            records = (await session.scalars(stmt)).all()
            return [Application.model_validate(record) for record in records]

    async def _update(self, application_id: str, changes: dict[str, Any]) -> Application:
        async with self._session_factory() as session:
            record = await session.get(ApplicationRecord, application_id)
            if record is None:
                self._logger.error("applications.not_found", application_id=application_id)
                raise ApplicationNotFoundError(application_id)
            for field, value in changes.items():
                setattr(record, field, value)
            await session.commit()
            application = Application.model_validate(record)

        self._logger.info(
            "applications.updated",
            application_id=application_id,
            fields=sorted(changes),
        )
        return application
