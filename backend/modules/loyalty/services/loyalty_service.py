# backend/modules/loyalty/services/loyalty_service.py

"""
Core service for the loyalty points program.
"""

from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, List, Optional, Tuple
import logging
import math

from core.error_handling import NotFoundError, APIValidationError
from modules.auth.models import User
from modules.notifications.services import NotificationService
from ..models.loyalty_models import LoyaltyTransaction
from .tier_rules import calculate_tier, get_tier_benefits, get_points_multiplier

logger = logging.getLogger(__name__)

REFERRER_BONUS_POINTS = 500
REFERRAL_WELCOME_POINTS = 200


class LoyaltyService:
    """Service for loyalty points, tiers and referrals"""

    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.notifications = notifications or NotificationService(db)

    def _get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    # ========== Points ==========

    async def add_loyalty_points(
        self,
        user_id: int,
        points: int,
        transaction_type: str,
        description: str,
        order_id: Optional[int] = None,
        multiplier: float = 1,
    ) -> Dict[str, Any]:
        """
        Award points to a user and recalculate the tier.

        The awarded amount is ``floor(points * multiplier)``. A tier change
        sends a ``loyalty_tier_upgrade`` notification.

        Returns:
            ``{success, points, newBalance, tier}`` or
            ``{success: False, error}`` when the user is missing or the
            write fails
        """
        try:
            user = self._get_user(user_id)
            if not user:
                return {"success": False, "error": "User not found"}

            awarded = math.floor(points * multiplier)
            new_balance = (user.loyalty_points or 0) + awarded

            self.db.add(
                LoyaltyTransaction(
                    user_id=user_id,
                    points_earned=awarded,
                    points_balance=new_balance,
                    type=transaction_type,
                    description=description,
                    order_id=order_id,
                    multiplier=multiplier,
                )
            )

            previous_tier = user.loyalty_tier
            new_tier = calculate_tier(new_balance)
            user.loyalty_points = new_balance
            user.loyalty_tier = new_tier
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to add loyalty points for user {user_id}: {e}")
            return {"success": False, "error": "Failed to add points"}

        if new_tier != previous_tier:
            logger.info(f"User {user_id} moved from {previous_tier} to {new_tier}")
            await self.notifications.send_notification(
                user_id,
                "loyalty_tier_upgrade",
                "Tier Upgraded!",
                f"Congratulations! You've been upgraded to {new_tier} tier.",
                {"tier": new_tier, "points": new_balance},
            )

        return {
            "success": True,
            "points": awarded,
            "newBalance": new_balance,
            "tier": new_tier,
        }

    async def redeem_loyalty_points(
        self,
        user_id: int,
        points: int,
        description: str,
        order_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Spend points from the user's balance. The tier is left unchanged."""
        try:
            user = self._get_user(user_id)
            if not user:
                return {"success": False, "error": "User not found"}

            if points > (user.loyalty_points or 0):
                return {"success": False, "error": "Insufficient points"}

            new_balance = user.loyalty_points - points
            self.db.add(
                LoyaltyTransaction(
                    user_id=user_id,
                    points_redeemed=points,
                    points_balance=new_balance,
                    type="redemption",
                    description=description,
                    order_id=order_id,
                )
            )
            user.loyalty_points = new_balance
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to redeem loyalty points for user {user_id}: {e}")
            return {"success": False, "error": "Failed to redeem points"}

        return {"success": True, "pointsRedeemed": points, "newBalance": new_balance}

    async def award_order_points(self, order) -> Dict[str, Any]:
        """Points for a paid order: one per whole currency unit, scaled by tier"""
        user = self._get_user(order.user_id)
        if not user:
            return {"success": False, "error": "User not found"}

        return await self.add_loyalty_points(
            user.id,
            math.floor(order.total_amount or 0),
            "order",
            f"Points earned for order #{order.id}",
            order_id=order.id,
            multiplier=get_points_multiplier(user.loyalty_tier),
        )

    # ========== Queries ==========

    def get_points_summary(self, user_id: int) -> Dict[str, Any]:
        user = self._get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        recent = (
            self.db.query(LoyaltyTransaction)
            .filter(LoyaltyTransaction.user_id == user_id)
            .order_by(desc(LoyaltyTransaction.created_at), desc(LoyaltyTransaction.id))
            .limit(10)
            .all()
        )

        return {
            "loyalty_points": user.loyalty_points,
            "loyalty_tier": user.loyalty_tier,
            "referral_code": user.referral_code,
            "transactions": recent,
            "tier_benefits": get_tier_benefits(user.loyalty_tier),
        }

    def list_transactions(
        self, user_id: int, page: int = 1, limit: int = 20
    ) -> Tuple[List[LoyaltyTransaction], int]:
        query = self.db.query(LoyaltyTransaction).filter(
            LoyaltyTransaction.user_id == user_id
        )
        total = query.count()
        transactions = (
            query.order_by(desc(LoyaltyTransaction.created_at), desc(LoyaltyTransaction.id))
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return transactions, total

    # ========== Referrals ==========

    async def apply_referral(self, user_id: int, referral_code: str) -> Dict[str, Any]:
        """
        Link the user to the owner of ``referral_code`` and grant both bonuses.

        Raises:
            APIValidationError: Referral already applied, or own code
            NotFoundError: No user owns the code
        """
        user = self._get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        if user.referred_by:
            raise APIValidationError("Referral code already applied")

        referrer = (
            self.db.query(User).filter(User.referral_code == referral_code).first()
        )
        if not referrer:
            raise NotFoundError("Invalid referral code")

        if referrer.id == user.id:
            raise APIValidationError("Cannot use your own referral code")

        user.referred_by = referrer.id
        self.db.commit()

        await self.add_loyalty_points(
            referrer.id,
            REFERRER_BONUS_POINTS,
            "referral",
            "Referral bonus - new user joined",
        )
        await self.add_loyalty_points(
            user.id,
            REFERRAL_WELCOME_POINTS,
            "referral",
            "Welcome bonus - referral applied",
        )

        logger.info(f"User {user.id} applied referral code of user {referrer.id}")
        return {
            "message": (
                f"Referral code applied successfully! "
                f"You received {REFERRAL_WELCOME_POINTS} points."
            ),
            "points_earned": REFERRAL_WELCOME_POINTS,
        }
