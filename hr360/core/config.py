"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL (hosted relational store)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "hr360_user"
    postgres_password: str = ""
    postgres_db: str = "hr360_db"
    # Full URL overrides the parts above (e.g. sqlite:///./hr360.db)
    database_url: str = ""

    # MongoDB (flow outputs, raw uploads, assessment sessions)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "hr360_docs"

    # LLM provider (OpenAI-compatible endpoint)
    llm_api_key: str = ""
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    llm_model: str = "gemini-1.5-flash"
    llm_temperature: float = 0.2
    # Per-flow model override, e.g. FLOW_MODELS='{"video_analyzer": "gemini-1.5-pro"}'
    flow_models: Dict[str, str] = {}
    # Empty disables picture-puzzle image generation
    image_model: str = ""

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Assessments
    typing_test_duration_seconds: int = 60
    aptitude_default_questions: int = 5
    aptitude_default_minutes: int = 10

    # Hiring Drive Mode
    hiring_drive_interval_seconds: float = 10.0

    # App
    debug: bool = False
    log_level: str = "INFO"
    log_dir: str = "logs"

    @property
    def database_url_resolved(self) -> str:
        """Construct the relational store URL"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def database_configured(self) -> bool:
        """False when no credentials were supplied (local/demo mode)."""
        return bool(self.database_url or self.postgres_password)

    def model_for_flow(self, flow_name: str) -> str:
        return self.flow_models.get(flow_name) or self.llm_model

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
