"""Process configuration: credential and model selection."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigurationError, InvalidModelError

API_KEY_ENV_VARS = ("NANOBANANA_GEMINI_API_KEY", "GEMINI_API_KEY")
MODEL_ENV_VAR = "NANOBANANA_MODEL"
EVENTS_ENV_VAR = "NANOBANANA_EVENTS"
LOG_LEVEL_ENV_VAR = "NANOBANANA_LOG_LEVEL"

ALLOWED_MODELS = (
    "gemini-2.5-flash-image",
    "gemini-3-pro-image-preview",
    "gemini-3.1-flash-image-preview",
)
DEFAULT_MODEL = "gemini-2.5-flash-image"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    events_path: str | None = None
    log_level: str = "WARNING"

    def __repr__(self) -> str:
        return f"Settings(api_key='***', model={self.model!r}, events_path={self.events_path!r})"


def resolve_api_key(env: Mapping[str, str]) -> str:
    for name in API_KEY_ENV_VARS:
        value = str(env.get(name) or "").strip()
        if value:
            return value
    raise ConfigurationError(
        "Gemini API key not configured. Set GEMINI_API_KEY or NANOBANANA_GEMINI_API_KEY environment variable."
    )


def resolve_model(env: Mapping[str, str]) -> str:
    requested = str(env.get(MODEL_ENV_VAR) or "").strip()
    if not requested:
        return DEFAULT_MODEL
    if requested not in ALLOWED_MODELS:
        raise InvalidModelError(f"Invalid model \"{requested}\". Allowed models: {', '.join(ALLOWED_MODELS)}")
    return requested


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    source = os.environ if env is None else env
    events_path = str(source.get(EVENTS_ENV_VAR) or "").strip() or None
    log_level = str(source.get(LOG_LEVEL_ENV_VAR) or "").strip().upper() or "WARNING"
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"Invalid log level \"{log_level}\". Allowed: {', '.join(LOG_LEVELS)}")
    return Settings(
        api_key=resolve_api_key(source),
        model=resolve_model(source),
        events_path=events_path,
        log_level=log_level,
    )
