# backend/modules/wallet/models/wallet_models.py

"""
Prepaid wallet ledger.
"""

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Index
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
import enum


class WalletTransactionType(str, enum.Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    REFUND = "refund"
    CASHBACK = "cashback"


class WalletTransaction(Base, TimestampMixin):
    """Ledger entry with the balance snapshot on both sides of the change"""
    __tablename__ = "wallet_transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    type = Column(String(20), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    balance_before = Column(Numeric(12, 2), nullable=False)
    balance_after = Column(Numeric(12, 2), nullable=False)

    description = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="completed")
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True, index=True)
    reference_id = Column(String(100), nullable=True)  # External payment reference

    user = relationship("User")

    __table_args__ = (
        Index("ix_wallet_transactions_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<WalletTransaction(id={self.id}, type={self.type}, amount={self.amount})>"
