"""Application configuration and settings."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "oncotriage"
    oncotriage_port: int = 8010
    environment: str = "development"
    cors_origins: List[str] = ["http://localhost:3000"]

    # Analysis Configuration
    text_analysis_confidence: float = 0.85
    default_analysis_confidence: float = 0.8
    max_key_phrases: int = 5

    # Inference provider ("mock" is the only bundled provider)
    inference_provider: str = "mock"
    image_processing_delay_seconds: float = 1.5

    # Quick triage sessions (in-memory, per caller)
    max_quick_sessions: int = 10000

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
