"""
Application configuration and environment settings.
"""
from decimal import Decimal
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "GroupTally"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./grouptally.sqlite3"
    DB_ECHO: bool = False

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8081"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Settlement
    SETTLEMENT_TOLERANCE: Decimal = Decimal("0.01")  # Balances within this are treated as settled
    CURRENCY_PLACES: int = 2  # Decimal places used when presenting amounts
    DEFAULT_CATEGORY: str = "other"

    @field_validator("SETTLEMENT_TOLERANCE")
    @classmethod
    def check_tolerance(cls, v):
        """Tolerance must be non-negative."""
        if v < 0:
            raise ValueError("SETTLEMENT_TOLERANCE must be >= 0")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
