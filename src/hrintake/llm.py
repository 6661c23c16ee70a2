"""Generative model client and helpers for reading model output."""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

import structlog
from google import genai
from google.genai import types

from .errors import ModelCallError
from .schemas.config import DEFAULT_MODEL, LLMConfig


@runtime_checkable
class GenerativeModel(Protocol):
    """Text generation contract used by the resume parser and scoring engine.

    Implementations either return non-empty text or raise; callers treat both an
    exception and an empty string as a failed attempt.
    """

    async def generate(self, prompt: str) -> str:
        """Return the model's text response for ``prompt``."""


class GeminiClient:
    """Async Gemini client built on ``google-genai``."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.2,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
        )
        self._model = model
        self._config = types.GenerateContentConfig(temperature=temperature)
        self._logger = structlog.get_logger(__name__)

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
            config=self._config,
        )
        text = (response.text or "").strip()
        if not text:
            raise ModelCallError(f"{self._model} returned an empty response")
        self._logger.debug("llm.response", model=self._model, chars=len(text))
        return text


def build_model_client(
    *,
    api_key: str | None,
    model: str = DEFAULT_MODEL,
    temperature: float = 0.2,
    timeout_seconds: float = 30.0,
) -> GenerativeModel | None:
    """Return a Gemini client, or None when no credential is configured."""
    if not api_key:
        structlog.get_logger(__name__).info("llm.disabled", reason="no_api_key")
        return None
    return GeminiClient(
        api_key,
        model=model,
        temperature=temperature,
        timeout_seconds=timeout_seconds,
    )


def build_model_client_from_config(config: LLMConfig) -> GenerativeModel | None:
    return build_model_client(
        api_key=config.api_key,
        model=config.model,
        temperature=config.temperature,
        timeout_seconds=config.timeout_seconds,
    )


def extract_json_object(text: str | None) -> dict[str, Any] | None:
    """Best-effort extraction of the first JSON object embedded in model text.

    Model output is often wrapped in prose or markdown fences. Each ``{`` is tried
    in order and the first position that decodes to a complete object wins.
    Returns None when nothing decodes.
    """
    if not text:
        return None
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except RecursionError:
            # Nesting too deep to decode; later braces sit inside the same structure.
            return None
        except ValueError:
            # JSONDecodeError, or an integer literal past the int conversion limit.
            start = text.find("{", start + 1)
            continue
        return value
    return None


__all__ = [
    "GenerativeModel",
    "GeminiClient",
    "build_model_client",
    "build_model_client_from_config",
    "extract_json_object",
]
