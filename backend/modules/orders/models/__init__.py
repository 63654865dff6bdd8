from .order_models import Order

__all__ = ["Order"]
