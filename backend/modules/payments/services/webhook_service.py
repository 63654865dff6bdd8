# backend/modules/payments/services/webhook_service.py

import logging
from typing import Any, Dict
from datetime import datetime

from sqlalchemy.orm import Session

from core.email_service import send_order_confirmation_email
from core.error_handling import NotFoundError
from modules.auth.models import User
from modules.loyalty.services import LoyaltyService
from modules.orders.models import Order
from modules.orders.enums import OrderStatus
from modules.orders.api.websocket_tracking import manager


logger = logging.getLogger(__name__)


class WebhookService:
    """
    Service for handling Stripe webhook events
    """

    def __init__(self, db: Session):
        self.db = db

    async def process_event(self, event) -> None:
        """Dispatch a verified Stripe event by type"""
        event_type = event["type"]
        payment_intent = event["data"]["object"]

        if event_type == "payment_intent.succeeded":
            await self.handle_payment_succeeded(payment_intent)
        elif event_type == "payment_intent.payment_failed":
            self.handle_payment_failed(payment_intent)
        else:
            logger.info(f"Unhandled event type {event_type}")

    async def handle_payment_succeeded(self, payment_intent: Dict[str, Any]) -> Order:
        """
        Mark the order paid and accepted, then notify the customer.

        The step history is rebuilt from the intent creation time, the
        confirmation email goes out, loyalty points are awarded and the
        order room receives ``order:update``.
        """
        order_id = int(payment_intent["metadata"]["orderId"])
        order = self.db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("order not found")

        order.paid = True
        order.status = OrderStatus.ACCEPTED.value
        order.payment_intent_id = payment_intent.get("id")
        order.steps = []
        order.add_step(
            OrderStatus.PLACED.value,
            datetime.utcfromtimestamp(payment_intent["created"]),
        )
        order.add_step(OrderStatus.ACCEPTED.value)
        self.db.commit()
        self.db.refresh(order)

        user = self.db.query(User).filter(User.id == order.user_id).first()
        if user:
            send_order_confirmation_email(user.email, user.name, order)

        await LoyaltyService(self.db).award_order_points(order)
        await manager.broadcast_order_update(order)

        logger.info(f"Payment succeeded for order {order_id}")
        return order

    def handle_payment_failed(self, payment_intent: Dict[str, Any]) -> None:
        order_id = payment_intent.get("metadata", {}).get("orderId")
        logger.warning(f"Payment failed for order {order_id}")
