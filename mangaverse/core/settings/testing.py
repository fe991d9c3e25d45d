from typing import Optional

from .base import BaseSettings


class TestingSettings(BaseSettings):
    ENVIRONMENT: str = "testing"
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///:memory:"
    DATABASE_ECHO: bool = False

    SECRET_KEY: str = "testing-secret-key-not-for-real-use-at-least-32-chars"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Optional[str] = None

    model_config = {
        "case_sensitive": True,
        "env_file": None,
        "extra": "ignore",
    }
