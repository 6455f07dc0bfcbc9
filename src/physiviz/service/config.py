"""
Parse-service settings, read from the environment.

    OPENROUTER_API_KEY     API key for the language-model provider
    PHYSIVIZ_MODEL         model id             (openai/gpt-4o-mini)
    PHYSIVIZ_API_URL       chat completions URL (OpenRouter)
    PHYSIVIZ_TEMPERATURE   sampling temperature (0.7)
    PHYSIVIZ_MAX_TOKENS    response token cap   (2000)
    PHYSIVIZ_TIMEOUT       HTTP timeout [s]     (60)
    PORT                   server port          (5000)
    PHYSIVIZ_PARSE_URL     endpoint the dashboard calls
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "openai/gpt-4o-mini"
DEFAULT_PORT = 5000

_ENV_FIELDS = {
    "OPENROUTER_API_KEY": "api_key",
    "PHYSIVIZ_MODEL": "model",
    "PHYSIVIZ_API_URL": "api_url",
    "PHYSIVIZ_TEMPERATURE": "temperature",
    "PHYSIVIZ_MAX_TOKENS": "max_tokens",
    "PHYSIVIZ_TIMEOUT": "timeout",
    "PORT": "port",
    "PHYSIVIZ_PARSE_URL": "parse_url",
}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(2000, gt=0)
    timeout: float = Field(60.0, gt=0.0)
    port: int = DEFAULT_PORT
    parse_url: str = f"http://localhost:{DEFAULT_PORT}/api/parse"
    referer: str = f"http://localhost:{DEFAULT_PORT}"
    app_title: str = "PhysiViz AI"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables; empty values are ignored."""
        env = os.environ if environ is None else environ
        values = {field: env[key] for key, field in _ENV_FIELDS.items() if env.get(key)}
        return cls(**values)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Environment-derived settings, built on first use and then reused."""
    return Settings.from_env()
