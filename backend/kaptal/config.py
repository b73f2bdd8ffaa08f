"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Kaptal"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/kaptal.sqlite"

    # Auth
    jwt_secret: str = "kaptal-dev-secret-change-me-in-production"  # HS256 needs >= 32 bytes
    jwt_algorithm: str = "HS256"
    jwt_expires_in: str = "7d"  # <n>s, <n>m, <n>h or <n>d

    # AI Provider
    ai_provider: str = "openrouter"  # openrouter, ollama, openai, anthropic
    ai_model: str = "google/gemini-flash-1.5"
    ai_base_url: Optional[str] = None  # For Ollama: http://localhost:11434

    # API Keys (optional based on provider)
    openrouter_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    frontend_url: str = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
