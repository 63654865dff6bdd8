# backend/modules/loyalty/routes/loyalty_routes.py

"""
Routes for the customer loyalty program.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from core.auth import get_current_user, TokenData
from core.error_handling import handle_api_errors, APIValidationError
from core.schemas import Pagination

from ..services.loyalty_service import LoyaltyService
from ..schemas.loyalty_schemas import (
    LoyaltyPointsResponse,
    LoyaltyTransactionList,
    ReferralApplyRequest,
    ReferralApplyResponse,
    RedeemPointsRequest,
    RedeemPointsResponse,
)

router = APIRouter(prefix="/loyalty", tags=["Loyalty"])


@router.get("/points", response_model=LoyaltyPointsResponse)
@handle_api_errors(default_message="Failed to fetch loyalty points")
async def get_loyalty_points(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    """Points balance, tier, referral code and the last 10 transactions"""
    return LoyaltyService(db).get_points_summary(current_user.user_id)


@router.get("/transactions", response_model=LoyaltyTransactionList)
@handle_api_errors(default_message="Failed to fetch loyalty transactions")
async def get_loyalty_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    transactions, total = LoyaltyService(db).list_transactions(
        current_user.user_id, page=page, limit=limit
    )
    return {
        "transactions": transactions,
        "pagination": Pagination.build(page, limit, total),
    }


@router.post("/referral/apply", response_model=ReferralApplyResponse)
@handle_api_errors(default_message="Failed to apply referral code")
async def apply_referral_code(
    request: ReferralApplyRequest,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    """
    Apply another user's referral code.

    Raises:
        400: Referral already applied or own code
        404: Unknown referral code
    """
    return await LoyaltyService(db).apply_referral(
        current_user.user_id, request.referral_code
    )


@router.post("/redeem", response_model=RedeemPointsResponse)
@handle_api_errors(default_message="Failed to redeem points")
async def redeem_points(
    request: RedeemPointsRequest,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    description = (
        f"Redeemed on order #{request.order_id}"
        if request.order_id
        else "Points redeemed"
    )
    result = await LoyaltyService(db).redeem_loyalty_points(
        current_user.user_id, request.points, description, order_id=request.order_id
    )
    if not result["success"]:
        raise APIValidationError(result["error"])

    return {
        "points_redeemed": result["pointsRedeemed"],
        "new_balance": result["newBalance"],
    }
