"""Application settings read from ``ESTATE_``-prefixed environment variables."""

from functools import lru_cache
from typing import Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ESTATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Estate Leads CRM"
    api_version: str = "1.0.0"
    environment: str = Field(default="development", description="Runtime environment")
    secret_key: str = Field(default="change-me-estate-leads-crm-development-key", min_length=16)
    access_token_expire_minutes: int = Field(default=30, ge=1)
    database_url: str = "sqlite:///./estate_crm.db"
    log_level: str = "INFO"
    # Client phones shorter than this (after normalization) are rejected.
    min_phone_digits: int = Field(default=8, ge=1)
    allowed_distribution_methods: str = Field(
        default="roundrobin",
        description="Comma-separated list of accepted distribution methods",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @property
    def distribution_methods(self) -> Tuple[str, ...]:
        return tuple(m.strip().lower() for m in self.allowed_distribution_methods.split(",") if m.strip())

    @property
    def SECRET_KEY(self) -> str:
        return self.secret_key

    @property
    def ACCESS_TOKEN_EXPIRE_MINUTES(self) -> int:
        return self.access_token_expire_minutes


@lru_cache()
def get_settings() -> Settings:
    """Return the cached Settings instance."""
    return Settings()
