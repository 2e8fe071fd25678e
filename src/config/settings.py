"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The bot answers on behalf of a single company: `COMPANY_ID` selects whose client roster is
    matched against incoming messages.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")
    database_url: str = Field(alias="DATABASE_URL")
    company_id: str = Field(alias="COMPANY_ID")

    default_vat_rate: float = Field(default=10.0, alias="DEFAULT_VAT_RATE")
    db_pool_max_size: int = Field(default=5, ge=1, alias="DB_POOL_MAX_SIZE")

    llm_enabled: bool = Field(default=False, alias="LLM_ENABLED")
    llm_api_key: str | None = Field(default=None, alias="LLM_API_KEY")

    @field_validator("default_vat_rate")
    @classmethod
    def validate_vat_rate(cls, value: float) -> float:
        """Validate that the default VAT rate is a percentage."""

        if not 0 <= value <= 100:
            raise ValueError("DEFAULT_VAT_RATE must be between 0 and 100")
        return value

    @model_validator(mode="after")
    def validate_llm_config(self) -> Settings:
        """Validate the optional LLM parser configuration.

        If LLM intent parsing is enabled, an API key must be provided.
        """

        if self.llm_enabled and not self.llm_api_key:
            raise ValueError("LLM_API_KEY is required when LLM_ENABLED=true")
        return self


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
