# backend/modules/payments/schemas/payment_schemas.py

from decimal import Decimal
from typing import Optional

from core.schemas import CamelModel


class PaymentIntentCreate(CamelModel):
    # Both checked in the route so a missing value reports one message
    order_id: Optional[int] = None
    amount: Optional[Decimal] = None


class PaymentIntentResponse(CamelModel):
    client_secret: str


class WalletPaymentRequest(CamelModel):
    order_id: int


class WalletPaymentResponse(CamelModel):
    message: str
    order_id: int
    wallet_balance: Decimal


class WebhookReceived(CamelModel):
    received: bool = True
