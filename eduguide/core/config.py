# /eduguide/core/config.py

"""
Central configuration for the EduGuide backend.

Values are read from the process environment (after loading a local `.env`
file through python-dotenv) into a single `Settings` object. Components that
need configuration receive this object explicitly, either through the
`get_settings` FastAPI dependency or as a constructor argument, instead of
reading environment variables at import time.
"""

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Runtime settings for the API, the record store and the AI gateway."""

    database_url: str = Field(default="sqlite:///./eduguide.db")

    # --- Teaching-suggestion gateway ---
    google_api_key: Optional[str] = Field(default=None)
    gemini_model: str = Field(default="gemini-2.0-flash")
    gemini_timeout_seconds: float = Field(default=30.0, gt=0)

    # --- Authentication ---
    secret_key: str = Field(default="eduguide-development-secret-change-me")
    token_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60, gt=0)
    # The first administrator, created at startup when both are set.
    admin_email: Optional[str] = Field(default=None)
    admin_password: Optional[str] = Field(default=None)

    # --- CSV import ---
    upload_dir: str = Field(default="uploads")
    csv_chunk_size: int = Field(default=500, gt=0)

    log_level: str = Field(default="INFO")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @property
    def gemini_configured(self) -> bool:
        return bool(self.google_api_key)


def load_settings_from_env() -> Settings:
    """Builds a Settings object from environment variables, honouring `.env`."""
    load_dotenv()
    env = os.environ

    values = {
        "database_url": env.get("DATABASE_URL"),
        "google_api_key": env.get("GOOGLE_API_KEY") or env.get("GEMINI_API_KEY"),
        "gemini_model": env.get("GEMINI_MODEL"),
        "gemini_timeout_seconds": env.get("GEMINI_TIMEOUT_SECONDS"),
        "secret_key": env.get("SECRET_KEY"),
        "token_algorithm": env.get("TOKEN_ALGORITHM"),
        "access_token_expire_minutes": env.get("ACCESS_TOKEN_EXPIRE_MINUTES"),
        "admin_email": env.get("ADMIN_EMAIL"),
        "admin_password": env.get("ADMIN_PASSWORD"),
        "upload_dir": env.get("UPLOAD_DIR"),
        "csv_chunk_size": env.get("CSV_CHUNK_SIZE"),
        "log_level": env.get("LOG_LEVEL"),
    }
    cors = env.get("CORS_ORIGINS")
    if cors:
        values["cors_origins"] = [origin.strip() for origin in cors.split(",") if origin.strip()]

    # Unset variables fall back to the model defaults.
    return Settings(**{key: value for key, value in values.items() if value is not None})


@lru_cache()
def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return load_settings_from_env()
