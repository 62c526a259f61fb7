"""
Configuration management for the PDF Research Assistant
"""
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Configuration
    app_name: str = "PDF Research Assistant"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 1
    cors_origins: str = "*"

    # LLM Configuration (Gemini through its OpenAI-compatible endpoint)
    gemini_api_key: Optional[str] = None
    llm_model: str = "gemini-2.5-flash"
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"

    # Access gate and persisted state
    access_code: Optional[str] = None
    state_file: str = "./.assistant_state.json"

    # Document Configuration
    max_file_size_mb: int = 50
    max_excerpts: int = 3

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "structured"
    log_file: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


# Global settings instance
settings = Settings()
