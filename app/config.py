"""
Application settings, read once from the environment (and an optional .env file).
"""
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    database_url: str = "sqlite:///./bugs.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = "development"
    log_level: str = "INFO"

    # CORS: frontend allowed in addition to the local dev servers
    frontend_url: str = "http://localhost:5173"

    # Outbound notification on bug creation (disabled when unset)
    webhook_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("WEBHOOK_URL", "SLACK_WEBHOOK_URL"),
    )
    webhook_timeout_seconds: float = 5.0

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def cors_origins(self) -> list[str]:
        if not self.is_development:
            return [self.frontend_url]
        return list(dict.fromkeys([*DEV_ORIGINS, self.frontend_url]))


@lru_cache()
def get_settings() -> Settings:
    return Settings()
