"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Read once at process start; restart the service to pick up changes.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./gradebet.db"

    # Service
    service_name: str = "gradebet"
    log_level: str = "INFO"

    # Scoring
    persist_zero_awards: bool = False  # Write 0-point awards to the user score too
    leaderboard_limit: int = 50


settings = Settings()
