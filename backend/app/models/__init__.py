"""
Import every model so ``Base.metadata`` knows all tables.

Used by the application, the test suite and Alembic autogenerate.
"""

from modules.auth.models import User
from modules.reservations.models import Reservation
from modules.orders.models import Order
from modules.loyalty.models import LoyaltyTransaction
from modules.wallet.models import WalletTransaction
from modules.notifications.models import Notification

__all__ = [
    "User",
    "Reservation",
    "Order",
    "LoyaltyTransaction",
    "WalletTransaction",
    "Notification",
]
