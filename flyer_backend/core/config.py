# flyer_backend/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Optional env vars (.env):
      - DATABASE_URL (defaults to a local SQLite file)
      - DATABASE_SSL (append sslmode=require to Postgres URLs)
      - CORS_ORIGINS (JSON list of allowed origins)
      - DEFAULT_PAGE_SIZE / MAX_PAGE_SIZE (project listing)
      - IMPORT_MAX_BYTES (spreadsheet upload limit)
    """

    PROJECT_NAME: str = "Flyer Projects API"
    API_V1_STR: str = "/api/v1"

    # DB config
    DATABASE_URL: str = "sqlite:///./flyers.db"
    DATABASE_SSL: bool = False
    DB_ECHO: bool = False

    CORS_ORIGINS: list[str] = ["*"]

    # Project listing
    DEFAULT_PAGE_SIZE: int = 5
    MAX_PAGE_SIZE: int = 100

    # Spreadsheet import
    IMPORT_MAX_BYTES: int = 10 * 1024 * 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
