# backend/modules/wallet/schemas/wallet_schemas.py

from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from core.schemas import CamelModel, Pagination
from ..models.wallet_models import WalletTransactionType


class WalletBalanceResponse(CamelModel):
    wallet_balance: Decimal
    loyalty_points: int
    loyalty_tier: str


class WalletTransactionResponse(CamelModel):
    id: int
    type: WalletTransactionType
    amount: Decimal
    balance_before: Decimal
    balance_after: Decimal
    description: Optional[str] = None
    status: str
    order_id: Optional[int] = None
    created_at: datetime


class WalletTransactionList(CamelModel):
    transactions: List[WalletTransactionResponse]
    pagination: Pagination


class AddMoneyRequest(CamelModel):
    # Validated in the service so a missing amount reports "Invalid amount"
    amount: Optional[Decimal] = None
    payment_method: str = "card"
    transaction_id: Optional[str] = None


class AddMoneyResponse(CamelModel):
    message: str
    balance: Decimal
