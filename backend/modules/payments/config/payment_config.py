# backend/modules/payments/config/payment_config.py

import logging
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


logger = logging.getLogger(__name__)


class PaymentConfig(BaseSettings):
    """Stripe configuration read from the environment"""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    STRIPE_SECRET_KEY: Optional[str] = Field(
        default=None, description="Stripe secret API key"
    )
    STRIPE_WEBHOOK_SECRET: Optional[str] = Field(
        default=None, description="Signing secret of the webhook endpoint"
    )
    STRIPE_CURRENCY: str = Field(
        default="usd", description="Currency of created payment intents"
    )
    STRIPE_API_VERSION: str = Field(
        default="2023-10-16", description="Pinned Stripe API version"
    )
    STRIPE_MAX_NETWORK_RETRIES: int = Field(
        default=2, description="Retries the Stripe SDK makes on network errors"
    )

    @field_validator("STRIPE_CURRENCY", mode="after")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        if len(v) != 3:
            raise ValueError("STRIPE_CURRENCY must be a three-letter ISO code")
        return v.lower()

    @property
    def is_configured(self) -> bool:
        return bool(self.STRIPE_SECRET_KEY)


# Global configuration instance
payment_config = PaymentConfig()


def validate_payment_config():
    """Log the payment configuration summary on startup"""
    if not payment_config.is_configured:
        logger.warning("STRIPE_SECRET_KEY not set - payment endpoints are disabled")
        return False

    if not payment_config.STRIPE_WEBHOOK_SECRET:
        logger.warning("STRIPE_WEBHOOK_SECRET not set - webhooks will be rejected")

    logger.info(
        f"Stripe configured (currency={payment_config.STRIPE_CURRENCY}, "
        f"api_version={payment_config.STRIPE_API_VERSION})"
    )
    return True
