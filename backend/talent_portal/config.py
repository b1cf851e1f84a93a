"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./talent_portal.db"
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    AI_TIMEOUT_SECONDS: float = 30.0
    CORS_ORIGINS: str = "http://localhost:3000"
    PORTAL_TIMEZONE: str = "Africa/Johannesburg"  # IANA tz used for submission dates
    BCRYPT_ROUNDS: int = 12
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
