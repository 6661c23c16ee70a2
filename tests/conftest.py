from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hrintake.db import create_engine, create_session_factory, init_models

_ENV_KEYS = (
    "GEMINI_API_KEY",
    "GEMINI_API_KEY_002",
    "GEMINI_API_KEY_003",
    "SCORING_MODEL",
    "DATABASE_URL",
)


class StubModel:
    """Scripted generative model; exceptions in the script are raised in order."""

    def __init__(self, *responses: str | BaseException) -> None:
        self._responses = list(responses)
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._responses:
            raise RuntimeError("no scripted response left")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@asynccontextmanager
async def _open_store() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await init_models(engine)
    try:
        yield create_session_factory(engine)
    finally:
        await engine.dispose()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def stub_model() -> type[StubModel]:
    return StubModel


@pytest.fixture
def open_store():
    return _open_store
