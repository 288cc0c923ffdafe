from functools import lru_cache
from typing import Optional, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # API Settings
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Nano Banana API"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # OpenRouter
    OPENROUTER_API_KEY: Optional[str] = None
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_MODEL: str = "google/gemini-2.5-flash-image-preview"
    OPENROUTER_TIMEOUT: float = 60.0

    # Sent upstream as HTTP-Referer / X-Title
    SITE_URL: str = "http://localhost:3000"
    APP_TITLE: str = "Nano Banana"

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173"
    ]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        # logging only accepts upper-case level names
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
