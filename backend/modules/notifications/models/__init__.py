from .notification_models import Notification

__all__ = ["Notification"]
