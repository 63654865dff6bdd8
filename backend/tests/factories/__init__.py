# backend/tests/factories/__init__.py

"""
Shared test factories for the FoodHub backend.
"""

from .base import BaseFactory
from .auth import UserFactory, AdminUserFactory, DEFAULT_PASSWORD
from .order import OrderFactory
from .reservation import ReservationFactory

__all__ = [
    "BaseFactory",
    "UserFactory",
    "AdminUserFactory",
    "DEFAULT_PASSWORD",
    "OrderFactory",
    "ReservationFactory",
]
