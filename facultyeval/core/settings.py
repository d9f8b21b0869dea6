# facultyeval/core/settings.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from facultyeval import __version__


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Basics
    PROJECT_NAME: str = "facultyeval"
    VERSION: str = __version__
    DATABASE_URL: str = "sqlite:///facultyeval.db"

    # HTTP
    API_PREFIX: str = "/api/facultyeval"
    ROOT_PATH: str = ""          # e.g. "/prod" behind API Gateway
    ALLOW_ALL_CORS: bool = False
    DEBUG: bool = False

    # Signing key for bearer sign-in tokens
    SESSION_SECRET: str = ""

    LOG_LEVEL: str = "INFO"


# Settings singleton imported by the rest of the package
settings = Settings()
