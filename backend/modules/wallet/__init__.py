# backend/modules/wallet/__init__.py

"""
Prepaid customer wallet.
"""

from .routes.wallet_routes import router as wallet_router
from .services.wallet_service import WalletService

__all__ = ["wallet_router", "WalletService"]
