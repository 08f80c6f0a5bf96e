"""
Store env variables and other config settings.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars to prevent crashes
    )

    # LLM Configuration
    # NOTE: keep it optional for import-time, enforce at call-time.
    openai_api_key: SecretStr | None = Field(default=None, description="Primary LLM provider")
    gemini_api_key: SecretStr | None = Field(default=None, description="Fallback LLM provider")

    openai_model: str = "gpt-4o"
    gemini_model: str = "gemini-2.5-flash"
    llm_max_attempts: int = Field(default=1, ge=1, description="1 = single call, no retry")
    timeout_seconds: int = 30

    # Presentation
    display_locale: str = "en_US"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # MLflow
    mlflow_tracking_uri: str = "file:./mlruns"
    experiment_name: str = "salary_insights_v1"


@lru_cache
def get_settings() -> Settings:
    return Settings()
