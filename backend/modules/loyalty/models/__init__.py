# backend/modules/loyalty/models/__init__.py

from .loyalty_models import LoyaltyTransaction

__all__ = ["LoyaltyTransaction"]
