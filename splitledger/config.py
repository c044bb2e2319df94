"""Configuration management"""

import logging
from decimal import Decimal
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Split Ledger"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # CORS
    allowed_origins: List[str] = []

    # Ledger rules
    percentage_tolerance: Decimal = Decimal("0.001")
    max_settlement_amount: Decimal = Decimal("999999.99")

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name"""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v}")
        return level

    @field_validator("percentage_tolerance", "max_settlement_amount")
    @classmethod
    def validate_positive(cls, v: Decimal) -> Decimal:
        """Validate ledger limits are positive"""
        if v <= 0:
            raise ValueError("Ledger limits must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
