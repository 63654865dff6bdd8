# backend/modules/reservations/__init__.py

from .routes import router as reservations_router

__all__ = ["reservations_router"]
