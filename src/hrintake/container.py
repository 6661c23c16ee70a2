"""Dependency injection container for the intake system."""

from __future__ import annotations

from dependency_injector import containers, providers

from .config import build_app_config
from .core import EmailClassifier, JobMatcher, ResumeParser, ScoringEngine, SubjectParser
from .db import ApplicationRepository, JobPostingRepository, create_engine, create_session_factory
from .llm import build_model_client
from .pipeline import IntakePipeline
from .schemas.config import AppConfig


class IntakeContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    engine = providers.Singleton(
        create_engine,
        config.database.url,
        echo=config.database.echo,
    )
    session_factory = providers.Singleton(create_session_factory, engine)

    applications = providers.Singleton(ApplicationRepository, session_factory=session_factory)
    job_postings = providers.Singleton(JobPostingRepository, session_factory=session_factory)

    model_client = providers.Singleton(
        build_model_client,
        api_key=config.llm.api_key,
        model=config.llm.model,
        temperature=config.llm.temperature,
        timeout_seconds=config.llm.timeout_seconds,
    )

    subject_parser = providers.Singleton(SubjectParser)
    job_matcher = providers.Singleton(JobMatcher, lookup=job_postings)
    classifier = providers.Singleton(
        EmailClassifier,
        matcher=job_matcher,
        subject_parser=subject_parser,
    )
    resume_parser = providers.Singleton(ResumeParser, model=model_client)
    scoring_engine = providers.Singleton(ScoringEngine, model=model_client)

    pipeline = providers.Factory(
        IntakePipeline,
        classifier=classifier,
        resume_parser=resume_parser,
        scoring_engine=scoring_engine,
        applications=applications,
        job_postings=job_postings,
        max_resume_chars=config.intake.max_resume_chars,
    )


def create_container(
    *,
    config: AppConfig | None = None,
    settings: dict | None = None,
) -> IntakeContainer:
    """Instantiate the container from a resolved config or raw YAML settings."""

    app_config = config if config is not None else build_app_config(settings)
    container = IntakeContainer()
    container.config.from_dict(app_config.to_settings())
    return container
