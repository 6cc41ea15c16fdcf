"""
tasksapi.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT signing key).
- Refuse to start a prod deployment with the built-in development key.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    """
    Process-wide configuration, read once at startup and never mutated afterwards.
    """

    model_config = SettingsConfigDict(env_prefix="TASKS_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "tasksapi"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Session tokens
    jwt_alg: str = "HS256"
    jwt_issuer: str = "tasksapi"
    jwt_secret: str = Field(default=DEV_JWT_SECRET, repr=False, min_length=1)
    token_ttl_minutes: int = Field(default=10, ge=1)

    # Secret hashing; tests lower this to keep bcrypt fast.
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./tasks.db"

    @model_validator(mode="after")
    def _require_real_secret_in_prod(self) -> Settings:
        if self.env == "prod" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("TASKS_JWT_SECRET must be provided from the secret store in prod")
        return self

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(minutes=self.token_ttl_minutes)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The signing key and token ttl are consumed once by the service container
# (`tasksapi.api.deps.ServiceContainer`); request code never reads them directly.
