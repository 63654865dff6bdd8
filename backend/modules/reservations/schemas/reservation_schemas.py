# backend/modules/reservations/schemas/reservation_schemas.py

"""
Pydantic schemas for reservations.
"""

from pydantic import EmailStr
from datetime import datetime
from typing import Optional

from core.schemas import CamelModel
from ..models.reservation_models import ReservationStatus


class ReservationCreate(CamelModel):
    """
    Public booking form payload.

    Required fields are checked by the service so a missing field reports
    the booking-form message instead of a schema error.
    """

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    reservation_date: Optional[datetime] = None
    total_people: Optional[int] = None
    message: Optional[str] = None


class ReservationStatusUpdate(CamelModel):
    status: Optional[str] = None


class ReservationResponse(CamelModel):
    id: int
    name: str
    email: str
    reservation_date: datetime
    total_people: int
    message: Optional[str] = None
    status: ReservationStatus
    created_at: datetime
    updated_at: datetime


class ReservationMessageResponse(CamelModel):
    message: str
    reservation: ReservationResponse


class MessageResponse(CamelModel):
    message: str


