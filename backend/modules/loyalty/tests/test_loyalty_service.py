# backend/modules/loyalty/tests/test_loyalty_service.py

"""
Tests for points accrual, redemption and referrals.
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

from core.error_handling import APIValidationError, NotFoundError
from modules.loyalty.models import LoyaltyTransaction
from modules.loyalty.services import LoyaltyService
from modules.notifications.models import Notification
from tests.factories import UserFactory, OrderFactory


@pytest.fixture
def notifications():
    service = Mock()
    service.send_notification = AsyncMock()
    return service


@pytest.fixture
def loyalty_service(db_session, notifications):
    return LoyaltyService(db_session, notifications=notifications)


class TestAddPoints:
    @pytest.mark.asyncio
    async def test_multiplier_is_floored(self, db_session, loyalty_service):
        user = UserFactory(loyalty_points=100)

        result = await loyalty_service.add_loyalty_points(
            user.id, 33, "bonus", "Promo", multiplier=1.25
        )

        assert result == {
            "success": True,
            "points": 41,
            "newBalance": 141,
            "tier": "Bronze",
        }
        transaction = db_session.query(LoyaltyTransaction).one()
        assert transaction.points_earned == 41
        assert transaction.points_balance == 141
        assert transaction.multiplier == 1.25

    @pytest.mark.asyncio
    async def test_tier_upgrade_sends_notification(
        self, db_session, loyalty_service, notifications
    ):
        user = UserFactory(loyalty_points=1950)

        result = await loyalty_service.add_loyalty_points(
            user.id, 50, "bonus", "Promo"
        )

        assert result["tier"] == "Silver"
        db_session.refresh(user)
        assert user.loyalty_tier == "Silver"
        notifications.send_notification.assert_awaited_once()
        args = notifications.send_notification.await_args.args
        assert args[0] == user.id
        assert args[1] == "loyalty_tier_upgrade"
        assert "Silver" in args[3]

    @pytest.mark.asyncio
    async def test_same_tier_sends_nothing(self, loyalty_service, notifications):
        user = UserFactory(loyalty_points=10)

        await loyalty_service.add_loyalty_points(user.id, 10, "bonus", "Promo")

        notifications.send_notification.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_user(self, loyalty_service):
        result = await loyalty_service.add_loyalty_points(999, 10, "bonus", "Promo")

        assert result == {"success": False, "error": "User not found"}

    @pytest.mark.asyncio
    async def test_upgrade_is_stored_with_default_notifications(self, db_session):
        user = UserFactory(loyalty_points=9990)

        await LoyaltyService(db_session).add_loyalty_points(
            user.id, 10, "bonus", "Promo"
        )

        notification = db_session.query(Notification).one()
        assert notification.type == "loyalty_tier_upgrade"
        assert notification.data == {"tier": "Platinum", "points": 10000}


class TestRedeemPoints:
    @pytest.mark.asyncio
    async def test_redeem_reduces_balance_keeps_tier(self, db_session, loyalty_service):
        user = UserFactory(loyalty_points=2100, loyalty_tier="Silver")

        result = await loyalty_service.redeem_loyalty_points(
            user.id, 500, "Points redeemed"
        )

        assert result == {"success": True, "pointsRedeemed": 500, "newBalance": 1600}
        db_session.refresh(user)
        assert user.loyalty_points == 1600
        assert user.loyalty_tier == "Silver"
        transaction = db_session.query(LoyaltyTransaction).one()
        assert transaction.type == "redemption"
        assert transaction.points_redeemed == 500

    @pytest.mark.asyncio
    async def test_insufficient_points(self, db_session, loyalty_service):
        user = UserFactory(loyalty_points=10)

        result = await loyalty_service.redeem_loyalty_points(user.id, 11, "Too much")

        assert result == {"success": False, "error": "Insufficient points"}
        assert db_session.query(LoyaltyTransaction).count() == 0


class TestOrderPoints:
    @pytest.mark.asyncio
    async def test_order_points_use_tier_multiplier(self, db_session, loyalty_service):
        user = UserFactory(loyalty_points=5000, loyalty_tier="Gold")
        order = OrderFactory(user=user, total_amount=Decimal("25.99"))

        result = await loyalty_service.award_order_points(order)

        # floor(25.99) = 25, 25 * 1.5 = 37.5
        assert result["points"] == 37
        transaction = db_session.query(LoyaltyTransaction).one()
        assert transaction.type == "order"
        assert transaction.order_id == order.id


class TestReferral:
    @pytest.mark.asyncio
    async def test_referral_awards_both_users(self, db_session, loyalty_service):
        referrer = UserFactory()
        user = UserFactory()

        result = await loyalty_service.apply_referral(user.id, referrer.referral_code)

        assert result["points_earned"] == 200
        db_session.refresh(referrer)
        db_session.refresh(user)
        assert referrer.loyalty_points == 500
        assert user.loyalty_points == 200
        assert user.referred_by == referrer.id

    @pytest.mark.asyncio
    async def test_referral_only_once(self, loyalty_service):
        referrer = UserFactory()
        user = UserFactory()
        await loyalty_service.apply_referral(user.id, referrer.referral_code)

        with pytest.raises(APIValidationError, match="already applied"):
            await loyalty_service.apply_referral(user.id, referrer.referral_code)

    @pytest.mark.asyncio
    async def test_unknown_code(self, loyalty_service):
        user = UserFactory()

        with pytest.raises(NotFoundError, match="Invalid referral code"):
            await loyalty_service.apply_referral(user.id, "UNKNOWN1")

    @pytest.mark.asyncio
    async def test_own_code(self, db_session, loyalty_service):
        user = UserFactory()

        with pytest.raises(APIValidationError, match="own referral code"):
            await loyalty_service.apply_referral(user.id, user.referral_code)
        db_session.refresh(user)
        assert user.referred_by is None
