# backend/modules/payments/__init__.py

"""
Stripe card payments and wallet checkout.
"""

from .api.payment_endpoints import router as payments_router

__all__ = ["payments_router"]
