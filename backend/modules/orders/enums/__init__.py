from .order_enums import OrderStatus, OrderSocketEvent

__all__ = ["OrderStatus", "OrderSocketEvent"]
