# This project was developed with assistance from AI tools.
"""Database configuration via pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings -- reads from environment variables."""

    model_config = SettingsConfigDict(extra="ignore")

    # In-memory by default; any SQLAlchemy async URL works (e.g. postgresql+asyncpg://...)
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    SQL_ECHO: bool = False


db_settings = DatabaseSettings()
