from .payment_schemas import (
    PaymentIntentCreate,
    PaymentIntentResponse,
    WalletPaymentRequest,
    WalletPaymentResponse,
    WebhookReceived,
)

__all__ = [
    "PaymentIntentCreate",
    "PaymentIntentResponse",
    "WalletPaymentRequest",
    "WalletPaymentResponse",
    "WebhookReceived",
]
