"""Persistence layer for the application store."""

from __future__ import annotations

from .database import Base, async_database_url, create_engine, create_session_factory, init_models
from .repository import ApplicationRepository, JobPostingRepository

__all__ = [
    "ApplicationRepository",
    "Base",
    "JobPostingRepository",
    "async_database_url",
    "create_engine",
    "create_session_factory",
    "init_models",
]
