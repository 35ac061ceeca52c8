"""Configuration management for SWAPI Graph."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SWAPI_",
    )

    # Paths
    data_dir: Path = Field(default=Path("data"))

    # Output and logging
    log_level: str = Field(default="WARNING", description="Root log level for the CLI")
    json_indent: int = Field(default=2, description="Indent used when printing query results")

    @property
    def seeds_dir(self) -> Path:
        return self.data_dir / "seeds"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
