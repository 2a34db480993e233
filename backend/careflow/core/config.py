"""
Core configuration and settings for the FastAPI application.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application Info
    app_name: str = "CareFlow Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    DATABASE_URL: str = "sqlite:///./careflow.db"

    # Credentials handed out at registration, stored as bcrypt hashes
    provider_default_credential: str = "password123"
    recipient_default_credential: str = "patient123"
    credential_hash_rounds: int = 12

    # Report workflow
    default_rejection_reason: str = "Report needs additional information"

    # Seed DOC001/DOC002/PAT001/PAT002 on startup
    seed_demo_data: bool = True

    # CORS Settings
    cors_origins: list = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list = ["*"]
    cors_allow_headers: list = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
