# backend/modules/reservations/services/reservation_service.py

"""
Reservation booking and administration.
"""

from sqlalchemy.orm import Session
from sqlalchemy import desc
from datetime import datetime, timezone
from typing import List, Optional
import logging

from core.error_handling import NotFoundError
from ..models.reservation_models import Reservation, ReservationStatus
from ..schemas.reservation_schemas import ReservationCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "reservation_date", "total_people")
VALID_STATUSES = [s.value for s in ReservationStatus]


def _as_utc_naive(value: datetime) -> datetime:
    """Stored dates are naive UTC"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ReservationService:
    """Service for managing reservations"""

    def __init__(self, db: Session):
        self.db = db

    def create_reservation(
        self, data: ReservationCreate, now: Optional[datetime] = None
    ) -> Reservation:
        """
        Validate and store a booking request.

        Raises:
            ValueError: Missing fields, party size below one, or a date
                that is not in the future
        """
        if any(getattr(data, field) in (None, "") for field in REQUIRED_FIELDS):
            raise ValueError(
                "Missing required fields: name, email, reservationDate, totalPeople"
            )

        if data.total_people < 1:
            raise ValueError("Total people must be at least 1")

        reservation_date = _as_utc_naive(data.reservation_date)
        now = now or datetime.utcnow()
        if reservation_date <= now:
            raise ValueError("Reservation date must be in the future")

        reservation = Reservation(
            name=data.name,
            email=data.email,
            reservation_date=reservation_date,
            total_people=data.total_people,
            message=data.message,
            status=ReservationStatus.PENDING,
        )
        self.db.add(reservation)
        self.db.commit()
        self.db.refresh(reservation)

        logger.info(
            f"Reservation {reservation.id} created for {reservation.total_people} "
            f"on {reservation.reservation_date.isoformat()}"
        )
        return reservation

    def list_reservations(self) -> List[Reservation]:
        return (
            self.db.query(Reservation)
            .order_by(desc(Reservation.created_at), desc(Reservation.id))
            .all()
        )

    def get_reservation(self, reservation_id: int) -> Reservation:
        reservation = (
            self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
        )
        if not reservation:
            raise NotFoundError("Reservation not found")
        return reservation

    def update_status(self, reservation_id: int, status: Optional[str]) -> Reservation:
        if status not in VALID_STATUSES:
            raise ValueError(
                f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}"
            )

        reservation = self.get_reservation(reservation_id)
        reservation.status = ReservationStatus(status)
        self.db.commit()
        self.db.refresh(reservation)

        logger.info(f"Reservation {reservation_id} status set to {status}")
        return reservation

    def delete_reservation(self, reservation_id: int) -> None:
        reservation = self.get_reservation(reservation_id)
        self.db.delete(reservation)
        self.db.commit()
        logger.info(f"Reservation {reservation_id} deleted")
