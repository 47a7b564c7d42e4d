"""
Centralized configuration settings for the call-center jobs webhook.
"""
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow"
    )

    # Vapi Configuration
    vapi_webhook_secret: Optional[str] = None

    # Google Sheets
    google_sheet_id: str
    google_sheets_credentials_file: Optional[str] = None  # falls back to application-default credentials
    jobs_sheet_name: str = "Jobs"
    emergency_sheet_name: str = "Emergency"
    inquiry_sheet_name: str = "Inquiry"
    append_range: str = "A:Z"
    jobs_read_range: str = "A:K"
    value_input_option: str = "USER_ENTERED"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/app.log"

    # Environment
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def append_range_for(self, sheet_name: str) -> str:
        """A1 range used when appending rows to a worksheet."""
        return f"{sheet_name}!{self.append_range}"


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded once at startup."""
    return Settings()
