# backend/tests/factories/auth.py

from decimal import Decimal
from factory import Faker, Sequence

from core.auth import get_password_hash
from modules.auth.models import User
from .base import BaseFactory

DEFAULT_PASSWORD = "password123"
# Hashed once; bcrypt is slow
DEFAULT_PASSWORD_HASH = get_password_hash(DEFAULT_PASSWORD)


class UserFactory(BaseFactory):
    """Factory for creating customers."""

    class Meta:
        model = User

    name = Faker("name")
    email = Sequence(lambda n: f"user{n}@example.com")
    hashed_password = DEFAULT_PASSWORD_HASH
    role = "customer"
    wallet_balance = Decimal("0.00")
    loyalty_points = 0
    loyalty_tier = "Bronze"
    referral_code = Sequence(lambda n: f"REF{n:05d}")


class AdminUserFactory(UserFactory):
    """Factory for staff accounts."""

    role = "admin"
    email = Sequence(lambda n: f"admin{n}@example.com")
    referral_code = Sequence(lambda n: f"ADM{n:05d}")
