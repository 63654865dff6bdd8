# backend/modules/wallet/services/wallet_service.py

"""
Prepaid wallet ledger.

Every balance change writes a ``WalletTransaction`` holding the balance
before and after the change, then updates the cached balance on the user.
"""

from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple
import logging

from core.error_handling import NotFoundError, APIValidationError
from modules.auth.models import User
from modules.notifications.services import NotificationService
from ..models.wallet_models import WalletTransaction, WalletTransactionType

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Round a numeric value half-up to cents"""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class WalletService:
    """Service for wallet balance changes and history"""

    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.notifications = notifications or NotificationService(db)

    def _get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def _record(
        self,
        user: User,
        transaction_type: WalletTransactionType,
        amount: Decimal,
        description: str,
        order_id: Optional[int] = None,
        reference_id: Optional[str] = None,
    ) -> WalletTransaction:
        """Stage a ledger entry and move the user's balance by ``amount``"""
        balance_before = to_money(user.wallet_balance or 0)
        if transaction_type == WalletTransactionType.DEBIT:
            balance_after = balance_before - amount
        else:
            balance_after = balance_before + amount

        transaction = WalletTransaction(
            user_id=user.id,
            type=transaction_type.value,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            description=description,
            status="completed",
            order_id=order_id,
            reference_id=reference_id,
        )
        self.db.add(transaction)
        user.wallet_balance = balance_after
        return transaction

    # ========== Balance changes ==========

    async def add_money(
        self,
        user_id: int,
        amount,
        payment_method: str,
        transaction_id: Optional[str] = None,
    ) -> Decimal:
        """
        Top up the wallet.

        Raises:
            APIValidationError: Amount missing or not positive
            NotFoundError: Unknown user
        """
        if amount is None or to_money(amount) <= 0:
            raise APIValidationError("Invalid amount")

        amount = to_money(amount)
        user = self._get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        self._record(
            user,
            WalletTransactionType.CREDIT,
            amount,
            f"Added via {payment_method}" if payment_method else "Wallet top-up",
            reference_id=transaction_id,
        )
        self.db.commit()
        self.db.refresh(user)

        await self.notifications.send_notification(
            user_id,
            "wallet_credit",
            "Money Added",
            f"${amount} has been added to your wallet.",
            {"amount": str(amount), "balance": str(user.wallet_balance)},
        )
        return to_money(user.wallet_balance)

    async def deduct_from_wallet(
        self,
        user_id: int,
        amount,
        description: str,
        order_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        amount = to_money(amount)
        if amount <= 0:
            return {"success": False, "error": "Invalid amount"}
        try:
            user = self._get_user(user_id)
            if not user:
                return {"success": False, "error": "User not found"}

            if to_money(user.wallet_balance or 0) < amount:
                return {"success": False, "error": "Insufficient wallet balance"}

            transaction = self._record(
                user, WalletTransactionType.DEBIT, amount, description, order_id=order_id
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Wallet debit failed for user {user_id}: {e}")
            return {"success": False, "error": "Failed to deduct from wallet"}

        return {"success": True, "newBalance": transaction.balance_after}

    async def add_refund_to_wallet(
        self,
        user_id: int,
        amount,
        description: str,
        order_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        amount = to_money(amount)
        if amount <= 0:
            return {"success": False, "error": "Invalid amount"}
        try:
            user = self._get_user(user_id)
            if not user:
                return {"success": False, "error": "User not found"}

            transaction = self._record(
                user, WalletTransactionType.REFUND, amount, description, order_id=order_id
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Wallet refund failed for user {user_id}: {e}")
            return {"success": False, "error": "Failed to add refund"}

        return {"success": True, "newBalance": transaction.balance_after}

    async def add_cashback(
        self,
        user_id: int,
        amount,
        description: str,
        order_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        amount = to_money(amount)
        if amount <= 0:
            return {"success": False, "error": "Invalid amount"}
        try:
            user = self._get_user(user_id)
            if not user:
                return {"success": False, "error": "User not found"}

            transaction = self._record(
                user, WalletTransactionType.CASHBACK, amount, description, order_id=order_id
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Wallet cashback failed for user {user_id}: {e}")
            return {"success": False, "error": "Failed to add cashback"}

        await self.notifications.send_notification(
            user_id,
            "wallet_cashback",
            "Cashback Received",
            f"You received ${amount} cashback in your wallet.",
            {"amount": str(amount), "orderId": order_id},
        )
        return {"success": True, "newBalance": transaction.balance_after}

    # ========== Queries ==========

    def get_balance(self, user_id: int) -> Dict[str, Any]:
        user = self._get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        return {
            "wallet_balance": to_money(user.wallet_balance or 0),
            "loyalty_points": user.loyalty_points,
            "loyalty_tier": user.loyalty_tier,
        }

    def list_transactions(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        transaction_type: Optional[str] = None,
    ) -> Tuple[List[WalletTransaction], int]:
        query = self.db.query(WalletTransaction).filter(
            WalletTransaction.user_id == user_id
        )
        if transaction_type:
            query = query.filter(WalletTransaction.type == transaction_type)

        total = query.count()
        transactions = (
            query.order_by(desc(WalletTransaction.created_at), desc(WalletTransaction.id))
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return transactions, total
