"""
Portfolio Settings
==================

Environment-driven configuration (a local .env file is read too).
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # ---- Notion content sync ----
    NOTION_API_KEY: Optional[str] = None
    NOTION_DATASOURCE_ID: Optional[str] = None
    NOTION_BASE_URL: str = "https://api.notion.com"
    NOTION_VERSION: str = "2025-09-03"
    NOTION_TIMEOUT: float = 30.0

    # ---- Site ----
    PROJECTS_FILE: Path = BASE_DIR / "projects.json"
    FRONTEND_DIR: Path = BASE_DIR / "frontend"

    # ---- Board ----
    RESIZE_DEBOUNCE_SEC: float = 0.2
    SESSION_TTL_SEC: float = 30 * 60
    MAX_SESSIONS: int = 500

    # ---- Logging ----
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
