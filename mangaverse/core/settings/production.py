from typing import List, Optional

from pydantic import Field

from .base import BaseSettings


class ProductionSettings(BaseSettings):
    # ===============================
    # ENVIRONMENT SETTINGS
    # ===============================
    ENVIRONMENT: str = "production"
    DEBUG: bool = False

    # ===============================
    # DATABASE SETTINGS
    # ===============================
    DATABASE_URL: str = Field(..., description="PostgreSQL connection URL")
    DATABASE_ECHO: bool = False  # Never echo SQL in production

    # ===============================
    # SECURITY SETTINGS
    # ===============================
    SECRET_KEY: str = Field(..., description="JWT secret key")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # ===============================
    # CORS SETTINGS
    # ===============================
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default_factory=list, description="CORS origins for production frontends"
    )

    # ===============================
    # LOGGING SETTINGS
    # ===============================
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FILE: Optional[str] = Field(default=None, description="Log file path")

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
