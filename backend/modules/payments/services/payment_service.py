# backend/modules/payments/services/payment_service.py

import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from core.auth import TokenData
from core.error_handling import NotFoundError, AuthorizationError, APIValidationError
from modules.orders.models import Order
from modules.orders.enums import OrderStatus
from modules.orders.api.websocket_tracking import manager
from modules.wallet.services import WalletService
from ..gateways.stripe_gateway import StripeGateway


logger = logging.getLogger(__name__)


class PaymentService:
    """
    Service for charging orders through Stripe or the customer wallet
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_owned_order(self, order_id: int, current_user: TokenData) -> Order:
        order = self.db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("order not found")
        if order.user_id != current_user.user_id:
            raise AuthorizationError("forbidden")
        return order

    def create_payment_intent(
        self,
        gateway: StripeGateway,
        order_id: int,
        amount,
        current_user: TokenData,
    ) -> Dict[str, Any]:
        """
        Start a card payment for one of the user's orders.

        Returns:
            ``{"client_secret": ...}`` for the frontend card form
        """
        order = self._get_owned_order(order_id, current_user)

        intent = gateway.create_payment_intent(
            amount, {"orderId": order.id, "userId": current_user.user_id}
        )
        order.payment_intent_id = intent.id
        self.db.commit()

        return {"client_secret": intent.client_secret}

    async def pay_with_wallet(self, order_id: int, current_user: TokenData) -> Dict[str, Any]:
        """
        Settle an unpaid order from the wallet balance.

        Raises:
            APIValidationError: Order already paid or balance too low
        """
        order = self._get_owned_order(order_id, current_user)
        if order.paid:
            raise APIValidationError("Order already paid")

        result = await WalletService(self.db).deduct_from_wallet(
            current_user.user_id,
            order.total_amount,
            f"Payment for order #{order.id}",
            order_id=order.id,
        )
        if not result["success"]:
            raise APIValidationError(result["error"])

        order.paid = True
        order.status = OrderStatus.ACCEPTED.value
        order.add_step(OrderStatus.ACCEPTED.value)
        self.db.commit()
        self.db.refresh(order)

        logger.info(f"Order {order.id} paid from wallet")
        await manager.broadcast_order_update(order)

        return {
            "message": "Order paid from wallet",
            "order_id": order.id,
            "wallet_balance": result["newBalance"],
        }
