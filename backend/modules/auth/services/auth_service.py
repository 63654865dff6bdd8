# backend/modules/auth/services/auth_service.py

"""
Account registration and credential checks.
"""

from sqlalchemy.orm import Session
from typing import Dict, Optional
import logging
import secrets
import string

from core.auth import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    token_payload_for,
    verify_password,
    verify_token,
)
from core.error_handling import ConflictError, NotFoundError
from ..models.user_models import User

logger = logging.getLogger(__name__)

REFERRAL_CODE_LENGTH = 8
REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits


class AuthService:
    """Service for user accounts and session tokens"""

    def __init__(self, db: Session):
        self.db = db

    def generate_referral_code(self) -> str:
        """Random unused referral code"""
        while True:
            code = "".join(
                secrets.choice(REFERRAL_CODE_ALPHABET)
                for _ in range(REFERRAL_CODE_LENGTH)
            )
            exists = self.db.query(User.id).filter(User.referral_code == code).first()
            if not exists:
                return code

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        referral_code: Optional[str] = None,
    ) -> User:
        """
        Create a customer account.

        A supplied referral code is applied right after the account exists,
        granting the usual referral bonuses.

        Raises:
            ConflictError: Email already registered
            NotFoundError: Unknown referral code
        """
        email = email.lower()
        if self.db.query(User).filter(User.email == email).first():
            raise ConflictError("Email already registered")

        if referral_code and not (
            self.db.query(User.id).filter(User.referral_code == referral_code).first()
        ):
            raise NotFoundError("Invalid referral code")

        user = User(
            name=name,
            email=email,
            hashed_password=get_password_hash(password),
            role="customer",
            referral_code=self.generate_referral_code(),
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")

        if referral_code:
            from modules.loyalty.services import LoyaltyService

            await LoyaltyService(self.db).apply_referral(user.id, referral_code)
            self.db.refresh(user)

        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.db.query(User).filter(User.email == email.lower()).first()
        if not user or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login attempt for {email}")
            return None
        return user

    def issue_tokens(self, user: User) -> Dict[str, str]:
        payload = token_payload_for(user)
        return {
            "access_token": create_access_token(payload),
            "refresh_token": create_refresh_token(payload),
        }

    def refresh_access_token(self, refresh_token: Optional[str]) -> Optional[str]:
        """New access token for a valid refresh token of an existing user"""
        if not refresh_token:
            return None

        token_data = verify_token(refresh_token, token_type="refresh")
        if token_data is None:
            return None

        user = self.db.query(User).filter(User.id == token_data.user_id).first()
        if not user:
            return None

        return create_access_token(token_payload_for(user))
