"""Configuration management utilities.

Credentials are resolved once per process into an :class:`AppConfig` value which is
then handed to the container; nothing downstream reads the environment directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import ConfigError
from ..schemas.config import DEFAULT_MODEL, AppConfig, load_config


class EnvSettings(BaseSettings):
    """Environment-provided values; key fields are listed in rotation priority."""

    gemini_api_key: str | None = None
    gemini_api_key_002: str | None = None
    gemini_api_key_003: str | None = None
    scoring_model: str | None = None
    database_url: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def api_key_candidates(self) -> list[str | None]:
        return [self.gemini_api_key, self.gemini_api_key_002, self.gemini_api_key_003]


def resolve_api_key(candidates: Iterable[str | None]) -> str | None:
    """Return the first non-blank credential, or None when none is configured."""
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def resolve_model_name(override: str | None) -> str:
    """Use ``override`` only when it names a Gemini model."""
    if override and "gemini" in override.lower():
        return override.strip()
    return DEFAULT_MODEL


class ConfigManager:
    """YAML-backed configuration loader over a directory of named files."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def path_for(self, name: str) -> Path:
        """Resolve ``name``; a bare name gets the ``.yaml`` extension."""
        if Path(name).suffix:
            return self._base_path / name
        return self._base_path / f"{name}.yaml"

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration mapping by name; an empty file yields ``{}``."""
        path = self.path_for(name)
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file must be a YAML object: {path}")
        return loaded


def build_app_config(
    settings: dict[str, Any] | None = None,
    *,
    env: EnvSettings | None = None,
) -> AppConfig:
    """Merge YAML settings with the environment and resolve the API key."""
    app_config = load_config(settings)
    env = env if env is not None else EnvSettings()

    api_key = resolve_api_key([*env.api_key_candidates(), *app_config.llm.api_keys])
    model = resolve_model_name(env.scoring_model or app_config.llm.model)
    llm = app_config.llm.model_copy(update={"api_key": api_key, "model": model})

    database = app_config.database
    if env.database_url:
        database = database.model_copy(update={"url": env.database_url})

    return app_config.model_copy(update={"llm": llm, "database": database})


__all__ = [
    "ConfigManager",
    "EnvSettings",
    "build_app_config",
    "resolve_api_key",
    "resolve_model_name",
]
