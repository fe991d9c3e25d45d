from typing import List, Optional

from .base import BaseSettings


class DevelopmentSettings(BaseSettings):
    # ===============================
    # ENVIRONMENT SETTINGS
    # ===============================
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # ===============================
    # APPLICATION SETTINGS
    # ===============================
    PROJECT_NAME: str = "MangaVerse Reader API - Development"
    VERSION: str = "1.0.0-dev"

    # ===============================
    # DATABASE SETTINGS
    # ===============================
    DATABASE_URL: str = "sqlite:///./mangaverse.db"
    DATABASE_ECHO: bool = False

    # ===============================
    # SECURITY SETTINGS
    # ===============================
    SECRET_KEY: str = (
        "development-secret-key-please-change-in-production-environment-32-chars"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # Longer expiration for development

    # ===============================
    # CORS SETTINGS
    # ===============================
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5000",
        "http://127.0.0.1:5173",
    ]

    # ===============================
    # LOGGING SETTINGS
    # ===============================
    LOG_LEVEL: str = "DEBUG"
    LOG_FILE: Optional[str] = "logs/app.log"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env.dev",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
