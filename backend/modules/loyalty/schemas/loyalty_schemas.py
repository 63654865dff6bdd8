# backend/modules/loyalty/schemas/loyalty_schemas.py

from typing import List, Optional
from datetime import datetime
from pydantic import Field

from core.schemas import CamelModel, Pagination


class TierBenefits(CamelModel):
    points_multiplier: float
    delivery_discount: int
    priority_support: bool
    exclusive_deals: bool


class LoyaltyTransactionResponse(CamelModel):
    id: int
    points_earned: int
    points_redeemed: int
    points_balance: int
    type: str
    description: str
    order_id: Optional[int] = None
    multiplier: float
    created_at: datetime


class LoyaltyPointsResponse(CamelModel):
    loyalty_points: int
    loyalty_tier: str
    referral_code: str
    transactions: List[LoyaltyTransactionResponse]
    tier_benefits: TierBenefits


class LoyaltyTransactionList(CamelModel):
    transactions: List[LoyaltyTransactionResponse]
    pagination: Pagination


class ReferralApplyRequest(CamelModel):
    referral_code: str = Field(..., min_length=1, max_length=12)


class ReferralApplyResponse(CamelModel):
    message: str
    points_earned: int


class RedeemPointsRequest(CamelModel):
    points: int = Field(..., gt=0)
    order_id: Optional[int] = None


class RedeemPointsResponse(CamelModel):
    points_redeemed: int
    new_balance: int
