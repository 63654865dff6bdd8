# backend/modules/notifications/schemas/notification_schemas.py

from typing import Any, Dict, List, Optional
from datetime import datetime

from core.schemas import CamelModel, Pagination


class NotificationResponse(CamelModel):
    id: int
    type: str
    title: str
    message: str
    data: Optional[Dict[str, Any]] = None
    is_read: bool
    created_at: datetime


class NotificationList(CamelModel):
    notifications: List[NotificationResponse]
    pagination: Pagination
