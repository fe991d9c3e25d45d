from typing import List, Optional

from pydantic_settings import BaseSettings as PydanticBaseSettings


class BaseSettings(PydanticBaseSettings):
    # ===============================
    # APPLICATION SETTINGS
    # ===============================
    PROJECT_NAME: str = "MangaVerse Reader API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Manga and novel reading platform with a coin-based chapter unlock economy"

    # ===============================
    # API SETTINGS
    # ===============================
    API_PREFIX: str = "/api"

    # ===============================
    # JWT ALGORITHM
    # ===============================
    ALGORITHM: str = "HS256"

    # ===============================
    # PAGINATION SETTINGS
    # ===============================
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # ===============================
    # READER SETTINGS
    # ===============================
    MAX_UNLOCK_PRICE: int = 100_000  # coins
    READING_HISTORY_LIMIT: int = 20

    # ===============================
    # LOGGING SETTINGS
    # ===============================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # ===============================
    # CORS SETTINGS
    # ===============================
    BACKEND_CORS_ORIGINS: List[str] = []

    # ===============================
    # COMPUTED PROPERTIES
    # ===============================
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
