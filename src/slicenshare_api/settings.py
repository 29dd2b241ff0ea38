"""
slicenshare_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., the MongoDB password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

import enum
from functools import lru_cache
from pathlib import Path
from typing import Annotated

import structlog
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

PACKAGE_PUBLIC_DIR = Path(__file__).resolve().parent / "public"


class Environment(str, enum.Enum):
    development = "development"
    test = "test"
    production = "production"


class Settings(BaseSettings):
    """
    Environment variable names follow the deployed service (PORT, NODE_ENV, MONGO_*),
    so existing `.env` files keep working unchanged.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Toggles stack traces in error bodies and the CORS development bypass.
    environment: Environment = Field(
        default=Environment.production,
        validation_alias=AliasChoices("environment", "node_env"),
    )
    service_name: str = "slicenshare-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    port: int = 5000
    base_url: str = "http://localhost:5000"

    # CORS
    production_client_url: str | None = None
    production_api_url: str | None = None
    cors_extra_origins: Annotated[list[str], NoDecode] = Field(default_factory=list)
    allow_any_origin_in_development: bool = True

    # Request bodies
    max_json_body_bytes: int = 100 * 1024

    # Persistence
    mongo_username: str = ""
    mongo_password: str = Field(default="", repr=False)
    mongo_cluster: str = ""
    mongo_db_name: str = ""
    connect_on_startup: bool = True

    # Static assets served under /public; defaults to the directory shipped with the package.
    static_dir: str = str(PACKAGE_PUBLIC_DIR)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        normalized = value.strip().lower()
        if normalized not in Environment.__members__:
            # Node-style values such as "staging" get production behavior.
            structlog.get_logger(__name__).warning(
                "unknown_environment", value=value, treated_as=Environment.production.value
            )
            return Environment.production
        return normalized

    @field_validator("cors_extra_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        # CORS_EXTRA_ORIGINS is a comma separated list in the environment.
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @property
    def is_development(self) -> bool:
        return self.environment is Environment.development


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every environment-gated behavior reads `Settings.environment` (via CorsPolicy or
# the error middleware) rather than looking up process env vars at request time.
