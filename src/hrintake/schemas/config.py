"""Pydantic configuration schema for YAML and environment input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..errors import ConfigError

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./hrintake.db"


class LLMConfig(BaseModel):
    api_keys: list[str] = Field(default_factory=list)
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    temperature: float = 0.2
    timeout_seconds: float = 30.0


class DatabaseConfig(BaseModel):
    url: str = DEFAULT_DATABASE_URL
    echo: bool = False


class IntakeConfig(BaseModel):
    max_resume_chars: int = Field(default=20_000, gt=0)


class AppConfig(BaseModel):
    llm: LLMConfig = Field(default_factory=LLMConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    intake: IntakeConfig = Field(default_factory=IntakeConfig)

    def to_settings(self) -> dict[str, Any]:
        """Return the mapping fed to the dependency-injection container."""
        return self.model_dump(mode="python")


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ConfigError("Config must be a mapping")
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc
