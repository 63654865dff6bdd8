# backend/tests/factories/reservation.py

from datetime import datetime, timedelta
from factory import Faker, LazyFunction

from modules.reservations.models import Reservation, ReservationStatus
from .base import BaseFactory


class ReservationFactory(BaseFactory):
    """Factory for creating reservations."""

    class Meta:
        model = Reservation

    name = Faker("name")
    email = Faker("email")
    reservation_date = LazyFunction(lambda: datetime.utcnow() + timedelta(days=3))
    total_people = 4
    message = "Window seat please"
    status = ReservationStatus.PENDING
