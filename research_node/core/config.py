"""Application configuration management."""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL

DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_PORT = 3306
DEFAULT_DB_USER = "root"
DEFAULT_DB_NAME = "research_node"
DEFAULT_PORT = 8081


class Settings(BaseSettings):
    """Resolved application settings used by FastAPI dependencies."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    db_host: str = Field(DEFAULT_DB_HOST, description="Relational store host")
    db_port: int = Field(DEFAULT_DB_PORT, description="Relational store port")
    db_user: str = Field(DEFAULT_DB_USER, description="Relational store user")
    db_pass: str = Field("", description="Relational store password")
    db_name: str = Field(DEFAULT_DB_NAME, description="Database holding users and items")
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias="DATABASE_URL",
        description="Full SQLAlchemy async URL, takes precedence over DB_* values",
    )

    host: str = Field("0.0.0.0", description="Application bind address")
    port: int = Field(DEFAULT_PORT, description="Application bind port")
    log_level: str = Field("INFO", description="Root logging level")

    performance_log_path: Path = Field(
        Path("performance_metrics_node.json"),
        description="Append-only NDJSON log of per-request performance records",
    )
    docker_metrics_path: Path = Field(
        Path("docker_metrics_node.json"),
        description="Container resource log written by an external collector",
    )
    password_scheme: Literal["plaintext", "pbkdf2"] = Field(
        "plaintext",
        description="How stored user passwords are compared at login",
    )

    @property
    def database_url(self) -> str | URL:
        """Return the SQLAlchemy async URL for the configured store."""

        if self.database_url_override:
            return self.database_url_override
        return URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_pass or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return a cached Settings instance built from the environment."""

    return Settings()
