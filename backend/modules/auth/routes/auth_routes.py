"""
Authentication routes for the FoodHub API.

Access tokens are returned in the response body; the refresh token lives
in an HTTP-only cookie that ``/auth/refresh`` exchanges for a new access
token.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from core.auth import REFRESH_TOKEN_EXPIRE_DAYS
from core.config import settings
from core.database import get_db
from core.error_handling import handle_api_errors

from ..services.auth_service import AuthService
from ..schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    SessionResponse,
    AccessTokenResponse,
)

REFRESH_COOKIE_NAME = "refresh_token"

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path="/auth",
    )


@router.post(
    "/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED
)
@handle_api_errors(default_message="Registration failed")
async def register(
    request: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Create a customer account and start a session.

    ## Request Body
    - **name**, **email**, **password**
    - **referralCode**: optional code of the referring user

    ## Errors
    - 409 when the email is already registered
    - 404 when the referral code is unknown
    """
    service = AuthService(db)
    user = await service.register(
        request.name, request.email, request.password, request.referral_code
    )
    tokens = service.issue_tokens(user)
    _set_refresh_cookie(response, tokens["refresh_token"])

    return {"access_token": tokens["access_token"], "user": user}


@router.post("/login", response_model=SessionResponse)
@handle_api_errors(default_message="Login failed")
async def login(
    request: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Authenticate with email and password.

    ## Response
    Returns the access token and user profile; the refresh token is set
    as an HTTP-only cookie.

    ## Example
    ```bash
    curl -X POST "http://localhost:5000/auth/login" \\
         -H "Content-Type: application/json" \\
         -d '{"email": "jane@example.com", "password": "secret-password"}'
    ```
    """
    service = AuthService(db)
    user = service.authenticate(request.email, request.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    tokens = service.issue_tokens(user)
    _set_refresh_cookie(response, tokens["refresh_token"])

    return {"access_token": tokens["access_token"], "user": user}


@router.post("/refresh", response_model=AccessTokenResponse)
@handle_api_errors(default_message="Token refresh failed")
async def refresh_access_token(request: Request, db: Session = Depends(get_db)):
    """Exchange the refresh cookie for a new access token"""
    access_token = AuthService(db).refresh_access_token(
        request.cookies.get(REFRESH_COOKIE_NAME)
    )
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {"access_token": access_token}


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response):
    """Drop the refresh cookie"""
    response.delete_cookie(REFRESH_COOKIE_NAME, path="/auth")
