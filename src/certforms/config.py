"""
Configuration management using environment variables or a .env file
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

MB = 1024 * 1024


class Settings(BaseSettings):
    """Business limits used by the validator catalog."""
    model_config = SettingsConfigDict(
        env_prefix="CERTFORMS_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Uploads
    signature_min_bytes: int = 1024
    signature_warn_bytes: int = 2 * MB
    signature_max_bytes: int = 5 * MB
    attachment_max_bytes: int = 10 * MB

    # Free text
    reject_reason_min_length: int = 10
    reject_reason_max_length: int = 500
    comments_max_length: int = 1000
    notes_warning_length: int = 500

    # Dates
    document_filter_max_span_days: int = 365
    activity_date_window_days: int = 365

    # Logging
    log_level: str = "WARNING"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
