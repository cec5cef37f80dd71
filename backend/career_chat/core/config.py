"""
Application configuration using Pydantic Settings.

Environment-based behavior switching is controlled by the APP_ENV variable.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_API_KEY = "your_gemini_api_key_here"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    APP_ENV: Literal["development", "test", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./career_chat.db"

    # SQLite busy timeout so concurrent writers wait for the lock
    DATABASE_TIMEOUT_SECONDS: float = 30.0

    # ===========================================
    # Guest quota
    # ===========================================
    ANONYMOUS_REQUEST_LIMIT: int = Field(3, ge=0)
    RATE_LIMIT_WINDOW_HOURS: int = Field(24, ge=1)

    # ===========================================
    # Chat
    # ===========================================
    MAX_MESSAGE_LENGTH: int = 4000
    HISTORY_CONTEXT_LIMIT: int = 10

    # ===========================================
    # LLM Configuration (Gemini API)
    # ===========================================
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GENERATION_TIMEOUT_SECONDS: float = 30.0
    GENERATION_MAX_OUTPUT_TOKENS: int = 1024
    GENERATION_TEMPERATURE: float = 0.7

    # ===========================================
    # Auth
    # ===========================================
    # mock: bearer token is the user id (development/tests)
    # local: HS256 JWT signed with LOCAL_JWT_SECRET
    AUTH_PROVIDER: Literal["mock", "local"] = "mock"
    LOCAL_JWT_SECRET: str = ""
    LOCAL_JWT_ISSUER: str = "career-chat"
    LOCAL_JWT_EXPIRE_MINUTES: int = 60 * 24 * 7

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # Resolve client IPs from X-Forwarded-For / X-Real-IP; enable only behind a
    # proxy that overwrites those headers, otherwise guests can forge fresh quota
    TRUST_PROXY_HEADERS: bool = False

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.APP_ENV == "production"

    @property
    def has_gemini_credentials(self) -> bool:
        """Check if a usable Gemini API key is configured."""
        key = self.GEMINI_API_KEY.strip()
        return bool(key) and key != PLACEHOLDER_API_KEY


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
