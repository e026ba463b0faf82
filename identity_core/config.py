"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - Settings are frozen: built once at process start, immutable afterwards
    - get_settings() is cached (lru_cache): single instance per process
    - Business logic never calls get_settings(); it receives Settings explicitly

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - database_url overrides the POSTGRES_* parts when set (tests point it at SQLite)
    - Hash work factor resolved from environment profile unless explicitly overridden
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from identity_core.core.domain_types import Environment

PRODUCTION_HASH_ROUNDS = 14
# bcrypt refuses anything below 4
DEVELOPMENT_HASH_ROUNDS = 4


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True, extra="ignore",
    )

    environment: Environment = Environment.DEVELOPMENT

    # Database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "local_user"
    postgres_password: str = "local_password"
    postgres_db: str = "local_db"
    postgres_ca: str | None = None
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Credentials
    password_hash_rounds: int | None = None

    # Sessions
    session_cookie_name: str = "session_id"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_production(self) -> bool:
        return self.environment is Environment.PRODUCTION

    @property
    def hash_rounds(self) -> int:
        if self.password_hash_rounds is not None:
            return self.password_hash_rounds
        if self.is_production:
            return PRODUCTION_HASH_ROUNDS
        return DEVELOPMENT_HASH_ROUNDS

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
