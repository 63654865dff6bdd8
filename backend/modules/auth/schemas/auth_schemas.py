# backend/modules/auth/schemas/auth_schemas.py

from typing import Optional
from decimal import Decimal
from pydantic import EmailStr, Field

from core.schemas import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    referral_code: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserInfo(CamelModel):
    id: int
    name: str
    email: str
    role: str
    wallet_balance: Decimal
    loyalty_points: int
    loyalty_tier: str
    referral_code: str


class SessionResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserInfo


class AccessTokenResponse(CamelModel):
    access_token: str
