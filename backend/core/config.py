from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./artikel.db"

    # Backend
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8000
    APP_DEBUG: bool = True
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)
    LOG_SQL: bool = False   # Enable SQLAlchemy query logging

    # Client-local store (settings + user dictionaries)
    LOCAL_STORE_PATH: str = "./artikel_local.json"

    # Training feedback timings (milliseconds)
    FEEDBACK_CORRECT_MS: int = 1500
    FEEDBACK_INVALID_MS: int = 1500
    FEEDBACK_INCORRECT_MS: int = 1500
    FEEDBACK_INCORRECT_MOBILE_MS: int = 2000
    HAPTIC_PULSE_MS: int = 50

    # Training sessions
    DEFAULT_ENABLED_DICTIONARIES: list[str] = ["A1"]
    MAX_SESSIONS: int = 256

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
