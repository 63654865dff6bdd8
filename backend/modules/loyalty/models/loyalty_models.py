# backend/modules/loyalty/models/loyalty_models.py

"""
Loyalty points ledger.
"""

from sqlalchemy import Column, Integer, String, Float, ForeignKey, Index
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin


class LoyaltyTransaction(Base, TimestampMixin):
    """One accrual or redemption of loyalty points"""
    __tablename__ = "loyalty_transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    points_earned = Column(Integer, nullable=False, default=0)
    points_redeemed = Column(Integer, nullable=False, default=0)
    points_balance = Column(Integer, nullable=False)  # Balance after this transaction

    type = Column(String(30), nullable=False, index=True)  # order, referral, redemption, bonus
    description = Column(String(255), nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True, index=True)
    multiplier = Column(Float, nullable=False, default=1.0)

    user = relationship("User")

    __table_args__ = (
        Index("ix_loyalty_transactions_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return (
            f"<LoyaltyTransaction(id={self.id}, user_id={self.user_id}, "
            f"earned={self.points_earned}, redeemed={self.points_redeemed})>"
        )
