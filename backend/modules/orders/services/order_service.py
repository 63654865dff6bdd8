# backend/modules/orders/services/order_service.py

from sqlalchemy.orm import Session
from sqlalchemy import desc
from datetime import datetime
from typing import Any, Dict, List
import logging

from core.auth import TokenData
from core.error_handling import NotFoundError, AuthorizationError
from ..models.order_models import Order
from ..enums.order_enums import OrderStatus
from ..api.websocket_tracking import manager

logger = logging.getLogger(__name__)


class OrderService:
    """Order lifecycle and the live updates pushed to order rooms"""

    def __init__(self, db: Session):
        self.db = db

    def create_order(self, user_id: int, total_amount) -> Order:
        order = Order(
            user_id=user_id,
            total_amount=total_amount,
            paid=False,
            status=OrderStatus.PLACED.value,
        )
        order.add_step(OrderStatus.PLACED.value)
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order.id} placed by user {user_id}")
        return order

    def list_orders_for_user(self, user_id: int) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.user_id == user_id)
            .order_by(desc(Order.created_at), desc(Order.id))
            .all()
        )

    def get_order(self, order_id: int) -> Order:
        order = self.db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("order not found")
        return order

    def get_order_for(self, order_id: int, current_user: TokenData) -> Order:
        """Order visible to its owner and to admins"""
        order = self.get_order(order_id)
        if order.user_id != current_user.user_id and current_user.role != "admin":
            raise AuthorizationError()
        return order

    async def update_status(self, order_id: int, status: OrderStatus) -> Order:
        order = self.get_order(order_id)
        order.status = status.value
        order.add_step(status.value)
        self.db.commit()
        self.db.refresh(order)

        logger.info(f"Order {order_id} moved to {status.value}")
        await manager.broadcast_order_update(order)
        return order

    async def assign_driver(self, order_id: int, driver: Dict[str, Any]) -> Order:
        order = self.get_order(order_id)
        order.driver = driver
        self.db.commit()
        self.db.refresh(order)

        await manager.broadcast_driver_assigned(order_id, driver)
        return order

    async def update_driver_location(
        self, order_id: int, location: Dict[str, Any]
    ) -> Dict[str, Any]:
        # Locations are relayed, not stored
        self.get_order(order_id)
        payload = dict(location, timestamp=datetime.utcnow().isoformat())
        await manager.broadcast_driver_location(order_id, payload)
        return payload
