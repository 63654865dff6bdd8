# backend/modules/notifications/services/notification_service.py

from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import Any, Dict, List, Optional, Tuple
import logging

from core.notification_adapter import (
    LoggingAdapter,
    NotificationAdapter,
    NotificationMessage,
)
from core.error_handling import NotFoundError
from ..models.notification_models import Notification


logger = logging.getLogger(__name__)


class NotificationService:
    """
    Stores in-app notifications and pushes them through the delivery adapter
    """

    def __init__(self, db: Session, adapter: Optional[NotificationAdapter] = None):
        self.db = db
        self._adapter = adapter or LoggingAdapter()

    async def send_notification(
        self,
        user_id: int,
        notification_type: str,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        """Persist a notification for the user and deliver it"""
        notification = Notification(
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            data=data or {},
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)

        delivered = await self._adapter.send_to_user(
            user_id, NotificationMessage.from_notification(notification)
        )
        if not delivered:
            logger.warning(
                f"Notification {notification.id} stored but not delivered "
                f"via {self._adapter.get_adapter_name()}"
            )

        return notification

    def list_notifications(
        self, user_id: int, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Notification], int]:
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        total = query.count()
        notifications = (
            query.order_by(desc(Notification.created_at), desc(Notification.id))
            .offset(skip)
            .limit(limit)
            .all()
        )
        return notifications, total

    def mark_read(self, user_id: int, notification_id: int) -> Notification:
        notification = (
            self.db.query(Notification)
            .filter(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
            .first()
        )
        if not notification:
            raise NotFoundError("Notification not found")

        notification.is_read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification
