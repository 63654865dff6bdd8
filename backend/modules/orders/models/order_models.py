from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Boolean, JSON
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
from ..enums.order_enums import OrderStatus
from datetime import datetime
from decimal import Decimal


class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    paid = Column(Boolean, nullable=False, default=False)
    status = Column(String(30), nullable=False, default=OrderStatus.PLACED.value, index=True)

    # [{"step": "placed", "timestamp": "..."}, ...]
    steps = Column(JSON, nullable=False, default=list)
    driver = Column(JSON, nullable=True)
    payment_intent_id = Column(String(255), nullable=True, index=True)

    user = relationship("User")

    def add_step(self, step: str, timestamp: datetime = None):
        """Append a status step; the JSON list is reassigned so the change is tracked."""
        timestamp = timestamp or datetime.utcnow()
        self.steps = list(self.steps or []) + [
            {"step": step, "timestamp": timestamp.isoformat()}
        ]

    def __repr__(self):
        return f"<Order(id={self.id}, status={self.status}, paid={self.paid})>"
