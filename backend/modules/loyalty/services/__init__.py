from .loyalty_service import LoyaltyService
from .tier_rules import calculate_tier, get_tier_benefits

__all__ = ["LoyaltyService", "calculate_tier", "get_tier_benefits"]
