# backend/modules/auth/models/user_models.py

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from decimal import Decimal

from core.database import Base
from core.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Platform account holding the cached wallet and loyalty balances"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="customer")  # customer, admin

    # Cached balances; the ledgers are the wallet/loyalty transaction tables
    wallet_balance = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    loyalty_points = Column(Integer, nullable=False, default=0)
    loyalty_tier = Column(String(20), nullable=False, default="Bronze")

    # Referral program
    referral_code = Column(String(12), unique=True, nullable=False, index=True)
    referred_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    referrer = relationship("User", remote_side=[id])

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, tier={self.loyalty_tier})>"
