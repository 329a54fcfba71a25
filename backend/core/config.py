"""
Logistics Back Office Configuration

Uses pydantic-settings for type-safe environment variable loading.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

DEFAULT_DB_PASSWORD = "root"
LOCAL_ENVS = {"", "local", "dev", "development", "test"}

# Find .env file: check CWD first, then parent (project root)
_env_file = Path(".env")
if not _env_file.exists():
    _parent_env = Path(__file__).resolve().parent.parent.parent / ".env"
    if _parent_env.exists():
        _env_file = _parent_env


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Logistics Back Office"
    app_version: str = "1.0.0"
    app_env: str = "local"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 4000

    # Database: DATABASE_URL wins, otherwise composed from the DB_* parts
    database_url: str = ""
    db_user: str = "postgres"
    db_password: str = DEFAULT_DB_PASSWORD
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "logistics_system"
    database_echo: bool = False
    database_ssl: bool = False
    database_auto_create: bool = False

    # CORS
    cors_origins: list[str] = ["*"]

    model_config = {
        "env_file": str(_env_file),
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def resolved_database_url(self) -> str:
        if self.database_url.strip():
            return self.database_url.strip()
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    @property
    def is_local(self) -> bool:
        return self.app_env.strip().lower() in LOCAL_ENVS


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    settings = Settings()
    _enforce_security_guardrails(settings)
    return settings


def _enforce_security_guardrails(settings: Settings) -> None:
    if settings.is_local:
        return

    if settings.debug:
        raise ValueError("Refusing to start with debug=true outside local/dev/test")
    if not settings.database_url.strip() and settings.db_password == DEFAULT_DB_PASSWORD:
        raise ValueError("Refusing to start with default database password outside local/dev/test")
