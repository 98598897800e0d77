"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - DATABASE_URL and SECRET_KEY have no defaults: absence is a fatal ConfigurationError
    - Settings are read once per process (get_settings is cached) and never re-read

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - load_settings() converts pydantic validation failures into ConfigurationError so
      startup code deals with a single error type
"""

from functools import lru_cache

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hackerclone.core.errors import ConfigurationError


def async_database_url(url: str) -> str:
    """Plain postgresql:// URLs need the asyncpg driver spelled out."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return async_database_url(v) if isinstance(v, str) else v

    database_pool_size: int = 10
    database_max_overflow: int = 0
    database_pool_timeout: float = 30.0

    # Credentials and sessions
    secret_key: str

    @field_validator("database_url", "secret_key")
    @classmethod
    def require_non_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    session_cookie_name: str = "auth-cookie"
    session_cookie_secure: bool = False
    session_max_age_seconds: int | None = None

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


def load_settings(**overrides) -> Settings:
    """Build Settings, raising ConfigurationError when a required value is missing."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        names = ", ".join(f.upper() for f in fields) or "settings"
        raise ConfigurationError(
            f"Missing or invalid configuration: {names}",
            setting=fields[0] if fields else None,
        ) from e


@lru_cache
def get_settings() -> Settings:
    return load_settings()
