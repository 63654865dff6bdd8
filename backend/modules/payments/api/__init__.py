from .payment_endpoints import router

__all__ = ["router"]
