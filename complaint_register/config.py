"""
Configuration management using pydantic-settings and python-dotenv
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///complaints.db",
        description="Async database connection URL"
    )
    DATABASE_ECHO: bool = Field(
        default=False,
        description="Echo SQL queries for debugging"
    )

    # Application
    ENVIRONMENT: str = Field(
        default="development",
        description="Application environment"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    UPLOAD_DIR: str = Field(
        default="uploads",
        description="Directory for uploaded attachments and spreadsheets"
    )
    DEFAULT_PAGE_SIZE: int = Field(
        default=10,
        ge=1,
        description="Page size used by the list view when none is requested"
    )

    # Serial numbers
    SERIAL_PREFIX: str = Field(
        default="C",
        description="Prefix of human-readable complaint serials"
    )
    SERIAL_WIDTH: int = Field(
        default=4,
        ge=1,
        description="Minimum zero-padded width of the serial sequence"
    )

    # Record lifecycle
    REPLACEMENT_RECEIVED_VALUE: str = Field(
        default="Yes",
        description="Replacement status marking a replacement as received"
    )
    INVERTED_RANGE_POLICY: str = Field(
        default="allow",
        pattern="^(allow|clamp|reject)$",
        description="How a solve/close date earlier than the complain date is handled"
    )
    DERIVED_DAYS_MODE: str = Field(
        default="reference",
        pattern="^(reference|recompute)$",
        description="reference: form recomputes solve days, import trusts the sheet; "
                    "recompute: both paths derive solve and close days from dates"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "allow"  # Allow extra fields from environment variables


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
