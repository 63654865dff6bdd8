# backend/modules/notifications/models/notification_models.py

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, JSON
from core.database import Base
from core.mixins import TimestampMixin


class Notification(Base, TimestampMixin):
    """In-app notification shown in the customer's inbox"""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)  # loyalty_tier_upgrade, wallet_credit, ...
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, default=dict)
    is_read = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<Notification(id={self.id}, user_id={self.user_id}, type={self.type})>"
