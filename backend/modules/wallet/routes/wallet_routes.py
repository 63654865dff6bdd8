# backend/modules/wallet/routes/wallet_routes.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from core.database import get_db
from core.auth import get_current_user, TokenData
from core.error_handling import handle_api_errors
from core.schemas import Pagination

from ..models.wallet_models import WalletTransactionType
from ..services.wallet_service import WalletService
from ..schemas.wallet_schemas import (
    WalletBalanceResponse,
    WalletTransactionList,
    AddMoneyRequest,
    AddMoneyResponse,
)

router = APIRouter(prefix="/wallet", tags=["Wallet"])


@router.get("/balance", response_model=WalletBalanceResponse)
@handle_api_errors(default_message="Failed to fetch wallet balance")
async def get_wallet_balance(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    return WalletService(db).get_balance(current_user.user_id)


@router.get("/transactions", response_model=WalletTransactionList)
@handle_api_errors(default_message="Failed to fetch wallet transactions")
async def get_wallet_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: Optional[WalletTransactionType] = Query(None),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    """Wallet history, newest first, optionally filtered by type"""
    transactions, total = WalletService(db).list_transactions(
        current_user.user_id,
        page=page,
        limit=limit,
        transaction_type=type.value if type else None,
    )
    return {
        "transactions": transactions,
        "pagination": Pagination.build(page, limit, total),
    }


@router.post("/add", response_model=AddMoneyResponse)
@handle_api_errors(default_message="Failed to add money")
async def add_money(
    request: AddMoneyRequest,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    """
    Credit the wallet after an external top-up payment.

    Raises:
        400: Amount missing or not positive
    """
    balance = await WalletService(db).add_money(
        current_user.user_id,
        request.amount,
        request.payment_method,
        request.transaction_id,
    )
    return {"message": "Money added successfully", "balance": balance}
