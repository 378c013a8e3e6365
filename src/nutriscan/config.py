"""Application configuration."""

import os
from collections.abc import Mapping

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutriscan.errors import ConfigurationError

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_QUOTES = {'"', "'"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The API key is not a field: `resolve_api_key` reads it on every analysis.
    """

    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    api_key_env: str = "OPENAI_API_KEY"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_api_key(
    env_var: str, environ: Mapping[str, str] | None = None
) -> str:
    """Read and sanitize the estimation service API key."""
    source = os.environ if environ is None else environ
    api_key = sanitize_api_key(source.get(env_var) or "")
    if not api_key:
        raise ConfigurationError(
            f"API key is missing. Set the {env_var} environment variable "
            "and restart or redeploy the app."
        )
    return api_key


def sanitize_api_key(raw: str) -> str:
    """Trim whitespace and drop one pair of surrounding quotes."""
    cleaned = raw.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in _QUOTES:
        cleaned = cleaned[1:-1]
    return cleaned
