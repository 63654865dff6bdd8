# backend/modules/payments/api/payment_endpoints.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session
import logging
import stripe

from core.database import get_db
from core.auth import get_current_user, TokenData
from core.error_handling import handle_api_errors
from ..gateways.stripe_gateway import StripeGateway, get_stripe_gateway
from ..services import PaymentService, WebhookService
from ..schemas import (
    PaymentIntentCreate,
    PaymentIntentResponse,
    WalletPaymentRequest,
    WalletPaymentResponse,
    WebhookReceived,
)


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
@handle_api_errors
async def create_payment_intent(
    payment_data: PaymentIntentCreate,
    gateway: StripeGateway = Depends(get_stripe_gateway),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    """
    Create a Stripe PaymentIntent for one of the caller's orders

    Returns the client secret used by the card form to confirm the payment.
    """
    if not payment_data.order_id or not payment_data.amount:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="missing orderId or amount",
        )

    try:
        return PaymentService(db).create_payment_intent(
            gateway, payment_data.order_id, payment_data.amount, current_user
        )
    except stripe.StripeError as e:
        logger.error(f"Stripe error creating payment intent: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.user_message or str(e),
        )


@router.post("/webhook", response_model=WebhookReceived)
async def handle_webhook(
    request: Request,
    gateway: StripeGateway = Depends(get_stripe_gateway),
    db: Session = Depends(get_db),
):
    """
    Handle incoming Stripe webhooks

    Called by Stripe, so it is authenticated by the signature header
    instead of a bearer token.
    """
    body = await request.body()
    sig_header = request.headers.get("stripe-signature")

    try:
        event = gateway.construct_event(body, sig_header)
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        return PlainTextResponse(
            f"Webhook Error: {e}", status_code=status.HTTP_400_BAD_REQUEST
        )

    try:
        await WebhookService(db).process_event(event)
    except Exception:
        logger.exception(f"Webhook handler error for event {event.get('id')}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "webhook handler error"},
        )

    return {"received": True}


@router.post("/wallet", response_model=WalletPaymentResponse)
@handle_api_errors(default_message="Wallet payment failed")
async def pay_with_wallet(
    payment: WalletPaymentRequest,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    """
    Pay an order from the wallet balance.

    Raises:
        400: Order already paid or insufficient wallet balance
        403: Order belongs to another user
        404: Unknown order
    """
    return await PaymentService(db).pay_with_wallet(payment.order_id, current_user)
