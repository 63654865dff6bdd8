# backend/modules/payments/gateways/stripe_gateway.py

import stripe
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from core.error_handling import ServiceUnavailableError
from ..config.payment_config import PaymentConfig, payment_config


logger = logging.getLogger(__name__)


def to_cents(amount) -> int:
    """Currency amount to the smallest unit, rounded half-up"""
    return int(
        (Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )


class StripeGateway:
    """Thin wrapper over the Stripe SDK calls the API needs"""

    def __init__(self, config: PaymentConfig):
        self.config = config

        stripe.api_key = config.STRIPE_SECRET_KEY
        stripe.api_version = config.STRIPE_API_VERSION
        stripe.max_network_retries = config.STRIPE_MAX_NETWORK_RETRIES

        self.webhook_secret = config.STRIPE_WEBHOOK_SECRET
        self.currency = config.STRIPE_CURRENCY

    def create_payment_intent(self, amount, metadata: Dict[str, Any]):
        """
        Create a PaymentIntent for ``amount`` in the configured currency.

        Raises:
            stripe.StripeError: The Stripe API rejected the request
        """
        intent = stripe.PaymentIntent.create(
            amount=to_cents(amount),
            currency=self.currency,
            metadata={key: str(value) for key, value in metadata.items()},
        )
        logger.info(f"Created payment intent {intent.id} for {metadata}")
        return intent

    def construct_event(self, payload: bytes, sig_header: Optional[str]):
        """
        Verify the webhook signature and parse the event.

        Raises:
            ValueError: Invalid payload
            stripe.SignatureVerificationError: Signature does not match
        """
        if not self.webhook_secret:
            raise ServiceUnavailableError("Payment service not configured")

        return stripe.Webhook.construct_event(payload, sig_header, self.webhook_secret)


def get_stripe_gateway() -> StripeGateway:
    """Dependency returning the gateway, or 503 when Stripe is not configured"""
    if not payment_config.is_configured:
        raise ServiceUnavailableError("Payment service not configured")
    return StripeGateway(payment_config)
