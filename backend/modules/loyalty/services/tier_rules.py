# backend/modules/loyalty/services/tier_rules.py

"""
Loyalty tier thresholds and the benefits attached to each tier.
"""

from typing import Any, Dict

# Minimum points for each tier, highest first
TIER_THRESHOLDS = (
    ("Platinum", 10000),
    ("Gold", 5000),
    ("Silver", 2000),
    ("Bronze", 0),
)

TIER_BENEFITS: Dict[str, Dict[str, Any]] = {
    "Bronze": {
        "pointsMultiplier": 1,
        "deliveryDiscount": 0,
        "prioritySupport": False,
        "exclusiveDeals": False,
    },
    "Silver": {
        "pointsMultiplier": 1.25,
        "deliveryDiscount": 10,
        "prioritySupport": False,
        "exclusiveDeals": True,
    },
    "Gold": {
        "pointsMultiplier": 1.5,
        "deliveryDiscount": 20,
        "prioritySupport": True,
        "exclusiveDeals": True,
    },
    "Platinum": {
        "pointsMultiplier": 2,
        "deliveryDiscount": 50,
        "prioritySupport": True,
        "exclusiveDeals": True,
    },
}


def calculate_tier(points: int) -> str:
    """Tier reached with the given point balance"""
    for tier, minimum in TIER_THRESHOLDS:
        if points >= minimum:
            return tier
    return "Bronze"


def get_tier_benefits(tier: str) -> Dict[str, Any]:
    # Unknown tiers get the entry level benefits
    return dict(TIER_BENEFITS.get(tier, TIER_BENEFITS["Bronze"]))


def get_points_multiplier(tier: str) -> float:
    return get_tier_benefits(tier)["pointsMultiplier"]
