# backend/core/notification_adapter.py

"""
Delivery channels for in-app notifications.

A notification is stored first and then handed to an adapter; adapters
only push, they never write to the database.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging


logger = logging.getLogger(__name__)


@dataclass
class NotificationMessage:
    """What a channel pushes to a user"""

    title: str
    message: str
    notification_type: str
    data: Dict[str, Any] = field(default_factory=dict)
    notification_id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def from_notification(cls, notification) -> "NotificationMessage":
        return cls(
            title=notification.title,
            message=notification.message,
            notification_type=notification.type,
            data=dict(notification.data or {}),
            notification_id=notification.id,
        )

    def to_payload(self) -> Dict[str, Any]:
        """camelCase body for push channels"""
        return {
            "id": self.notification_id,
            "type": self.notification_type,
            "title": self.title,
            "message": self.message,
            "data": self.data,
            "createdAt": self.created_at.isoformat(),
        }


class NotificationAdapter(ABC):
    """
    Base class for delivery channels

    Implement ``send_to_user`` to add push, SMS or email delivery.
    """

    @abstractmethod
    async def send_to_user(self, user_id: int, message: NotificationMessage) -> bool:
        """Deliver to one user; False when the channel could not deliver"""

    def get_adapter_name(self) -> str:
        return self.__class__.__name__


class LoggingAdapter(NotificationAdapter):
    """Writes notifications to the log; the default until a push channel exists"""

    def __init__(self, log_level: int = logging.INFO):
        self.log_level = log_level

    async def send_to_user(self, user_id: int, message: NotificationMessage) -> bool:
        logger.log(
            self.log_level,
            f"[NOTIFICATION] To User {user_id} - {message.title}: {message.message}",
            extra={"user_id": user_id, "notification": message.to_payload()},
        )
        return True

    def get_adapter_name(self) -> str:
        return "logging"


class FanOutAdapter(NotificationAdapter):
    """Sends through several channels; delivered if any channel succeeds"""

    def __init__(self, adapters: List[NotificationAdapter]):
        self.adapters = adapters

    async def send_to_user(self, user_id: int, message: NotificationMessage) -> bool:
        delivered = False
        for adapter in self.adapters:
            try:
                if await adapter.send_to_user(user_id, message):
                    delivered = True
            except Exception as e:
                logger.error(
                    f"Notification channel {adapter.get_adapter_name()} failed "
                    f"for user {user_id}: {e}"
                )
        return delivered

    def get_adapter_name(self) -> str:
        return "+".join(adapter.get_adapter_name() for adapter in self.adapters)
