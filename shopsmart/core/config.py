from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration for shopsmart-api and its command-line client.

    The database can be configured either with a full DATABASE_URL or with the
    DB_* pieces (recommended for production, where the password comes from a
    secret store).
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- Service ---
    app_name: str = Field(default="shopsmart-api", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    environment: str = Field(default="local", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # CORS allowlist (CSV), the Vite dev server by default
    cors_allowed_origins: str = Field(default="http://localhost:5173", validation_alias="CORS_ALLOWED_ORIGINS")

    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    # -------------------------
    # Database
    # -------------------------
    # Option A: full URL (used as is when present).
    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")

    # Option B: pieces
    db_dialect: str = Field(default="postgresql+psycopg", validation_alias="DB_DIALECT")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="shopsmart_db", validation_alias="DB_NAME")
    db_user: str = Field(default="shopsmart_app", validation_alias="DB_USER")
    db_password: Optional[str] = Field(default=None, validation_alias="DB_PASSWORD")

    # Create missing tables on startup instead of running Alembic (dev/sqlite)
    db_create_all: bool = Field(default=False, validation_alias="DB_CREATE_ALL")

    # --- Client ---
    api_url: str = Field(default="http://localhost:5000", validation_alias="SHOPSMART_API_URL")

    @property
    def database_url_resolved(self) -> str:
        """
        Return DATABASE_URL when defined, otherwise build it from DB_*.

        A missing DB_PASSWORD still yields a URL; connecting may fail if the
        server requires a password.
        """
        if self.database_url and self.database_url.strip():
            return self.database_url.strip()

        pwd = self.db_password or ""
        return f"{self.db_dialect}://{self.db_user}:{pwd}@{self.db_host}:{self.db_port}/{self.db_name}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
