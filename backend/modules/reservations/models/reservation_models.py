# backend/modules/reservations/models/reservation_models.py

"""
Table reservation model.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Enum
from core.database import Base
from core.mixins import TimestampMixin
import enum


class ReservationStatus(str, enum.Enum):
    """Reservation status enum"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Reservation(Base, TimestampMixin):
    """Reservation request submitted from the public booking form"""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    reservation_date = Column(DateTime, nullable=False, index=True)
    total_people = Column(Integer, nullable=False)
    message = Column(Text, nullable=True)

    status = Column(
        Enum(ReservationStatus, values_callable=lambda e: [m.value for m in e]),
        default=ReservationStatus.PENDING,
        nullable=False,
        index=True,
    )

    def __repr__(self):
        return f"<Reservation(id={self.id}, date={self.reservation_date}, status={self.status})>"
