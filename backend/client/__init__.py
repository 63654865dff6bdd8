"""
Python client for the FoodHub API.

``ApiClient`` wraps the REST API with bearer-token handling and
``OrderSocket`` follows a single order over the tracking WebSocket.
"""

from .api_client import ApiClient, SessionExpiredError, MemoryTokenStore
from .order_socket import OrderSocket

__all__ = ["ApiClient", "SessionExpiredError", "MemoryTokenStore", "OrderSocket"]
