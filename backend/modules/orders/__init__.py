from .routes.order_routes import router as orders_router
from .api.websocket_tracking import router as order_socket_router, manager

__all__ = ["orders_router", "order_socket_router", "manager"]
