"""Environment-driven settings for the quiz service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quiz_service.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_HOST,
    DEFAULT_PORT,
    SESSION_MAX_AGE_SECONDS,
)
from quiz_service.constants.quiz_constants import DEFAULT_QUESTIONS_FILE, SESSION_TIMEOUT_SECONDS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = "development"
    LOG_LEVEL: str | None = None
    LOG_FILE_PATH: str = "logs/app.log"

    API_BASE_URL: str = DEFAULT_API_BASE_URL
    SERVER_HOST: str = DEFAULT_HOST
    SERVER_PORT: int = Field(default=DEFAULT_PORT, ge=1, le=65535)

    SESSION_MAX_AGE_SECONDS: int = Field(default=SESSION_MAX_AGE_SECONDS, gt=0)
    QUIZ_TIMEOUT_SECONDS: float = Field(default=SESSION_TIMEOUT_SECONDS, gt=0)
    QUESTIONS_FILE_PATH: str = DEFAULT_QUESTIONS_FILE

    @field_validator("SERVER_PORT", mode="before")
    @classmethod
    def _strip_port_colon(cls, value: object) -> object:
        # Accept the ":8080" form as well as "8080".
        if isinstance(value, str):
            return value.strip().lstrip(":")
        return value

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def effective_log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "INFO" if self.is_production else "DEBUG"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
