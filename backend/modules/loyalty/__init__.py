# backend/modules/loyalty/__init__.py

"""
Loyalty points, tiers and referrals.
"""

from .routes.loyalty_routes import router as loyalty_router
from .models.loyalty_models import LoyaltyTransaction
from .services.loyalty_service import LoyaltyService

__all__ = ["loyalty_router", "LoyaltyTransaction", "LoyaltyService"]
