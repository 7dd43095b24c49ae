# backend/wellclass/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_DEFAULT_SECRET_KEY = SecretStr("wellclass-dev-secret-key-change-me")

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    load_dotenv(env_path)


class Settings(BaseSettings):
    environment: Literal["development", "test", "staging", "production"] = "development"
    log_level: str = Field(default="INFO", description="Root log level")

    # Sessions / tokens
    secret_key: SecretStr = Field(
        default=_DEFAULT_SECRET_KEY,
        description="Secret key for signing session tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 720  # 12 hours

    database_url: str = Field(
        default="sqlite:///./wellclass.db",
        description="SQLAlchemy database URL",
    )
    database_echo: bool = False

    # Frontend URL used to build checkout redirect targets
    frontend_url: str = "http://localhost:3000"

    # Stripe Configuration
    stripe_secret_key: SecretStr = Field(
        default=SecretStr(""),
        description="Stripe secret key for backend API calls",
    )
    stripe_webhook_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Stripe webhook secret for local dev (Stripe CLI)",
    )
    stripe_webhook_secret_platform: SecretStr = Field(
        default=SecretStr(""),
        description="Platform events webhook secret (deployed)",
    )
    stripe_currency: str = Field(default="brl", description="Currency for class payments")
    stripe_max_network_retries: int = Field(default=1, description="Retries for transient Stripe failures")

    # Booking policy
    booking_buffer_minutes: int = Field(
        default=60, description="Gap required before and after an active booking"
    )
    booking_min_duration_minutes: int = 30
    booking_max_duration_minutes: int = 240

    # Reviews
    review_comment_max_length: int = 1000

    # Messaging deep links: digits only, country code first (default: Brazilian mobile/landline)
    whatsapp_phone_pattern: str = Field(default=r"^55\d{2}9?\d{8}$")
    whatsapp_base_url: str = "https://wa.me"

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("frontend_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("stripe_currency")
    @classmethod
    def _lower_currency(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def webhook_secrets(self) -> list[str]:
        """Build list of webhook secrets to try in order."""
        secrets = []
        for secret in (self.stripe_webhook_secret, self.stripe_webhook_secret_platform):
            secret_str = secret.get_secret_value() if secret else ""
            if secret_str:
                secrets.append(secret_str)
        return secrets

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key.get_secret_value())


settings = Settings()
logger.info("[CONFIG] environment=%s database=%s", settings.environment, settings.database_url.split("@")[-1])
