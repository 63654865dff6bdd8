# backend/modules/notifications/__init__.py

from .routes.notification_routes import router as notifications_router
from .services.notification_service import NotificationService

__all__ = ["notifications_router", "NotificationService"]
