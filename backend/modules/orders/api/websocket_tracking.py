# backend/modules/orders/api/websocket_tracking.py

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from typing import Any, Dict, Set
import json
import logging

from ..enums.order_enums import OrderSocketEvent


logger = logging.getLogger(__name__)

router = APIRouter()


class ConnectionManager:
    """Manage WebSocket connections grouped into per-order rooms"""

    def __init__(self):
        # Map of order_id to the sockets watching it
        self.rooms: Dict[int, Set[WebSocket]] = {}
        # Map of connection to the orders it joined, for cleanup
        self.connection_orders: Dict[WebSocket, Set[int]] = {}

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.connection_orders[websocket] = set()
        logger.info("Order socket connected")

    def join(self, websocket: WebSocket, order_id: int):
        self.rooms.setdefault(order_id, set()).add(websocket)
        self.connection_orders.setdefault(websocket, set()).add(order_id)
        logger.debug(f"Socket joined order {order_id}")

    def leave(self, websocket: WebSocket, order_id: int):
        room = self.rooms.get(order_id)
        if room is not None:
            room.discard(websocket)
            if not room:
                del self.rooms[order_id]

        joined = self.connection_orders.get(websocket)
        if joined is not None:
            joined.discard(order_id)
        logger.debug(f"Socket left order {order_id}")

    def disconnect(self, websocket: WebSocket):
        """Remove a connection from every room it joined"""
        for order_id in list(self.connection_orders.get(websocket, ())):
            self.leave(websocket, order_id)
        self.connection_orders.pop(websocket, None)
        logger.info("Order socket disconnected")

    def room_size(self, order_id: int) -> int:
        return len(self.rooms.get(order_id, ()))

    async def emit_to_order(self, order_id: int, event: str, data: Any):
        """Send ``{"event", "data"}`` to every socket in the order's room"""
        message = {"event": event, "data": data}
        disconnected = []
        for connection in list(self.rooms.get(order_id, ())):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.error(f"Error sending {event} for order {order_id}: {e}")
                disconnected.append(connection)

        for conn in disconnected:
            self.disconnect(conn)

    async def broadcast_order_update(self, order):
        await self.emit_to_order(
            order.id, OrderSocketEvent.ORDER_UPDATE.value, serialize_order(order)
        )

    async def broadcast_driver_assigned(self, order_id: int, driver: Dict[str, Any]):
        await self.emit_to_order(
            order_id, OrderSocketEvent.DRIVER_ASSIGNED.value, driver
        )

    async def broadcast_driver_location(self, order_id: int, location: Dict[str, Any]):
        await self.emit_to_order(
            order_id, OrderSocketEvent.DRIVER_LOCATION.value, location
        )


def serialize_order(order) -> Dict[str, Any]:
    """JSON payload pushed with ``order:update``"""
    return {
        "id": order.id,
        "userId": order.user_id,
        "totalAmount": str(order.total_amount),
        "paid": order.paid,
        "status": order.status,
        "steps": order.steps or [],
        "driver": order.driver,
    }


# Global connection manager instance
manager = ConnectionManager()


def _parse_order_id(value) -> int:
    return int(value)


@router.websocket("/ws/orders")
async def websocket_orders(websocket: WebSocket):
    """
    WebSocket endpoint for live order tracking

    Clients send ``{"event": "join_order", "data": <orderId>}`` to start
    receiving updates for an order and ``leave_order`` to stop.
    """
    await manager.connect(websocket)

    try:
        while True:
            data = await websocket.receive_text()

            try:
                message = json.loads(data)
                event = message.get("event")
            except (json.JSONDecodeError, AttributeError):
                await websocket.send_json({"event": "error", "data": "Invalid JSON"})
                continue

            if event == "ping":
                await websocket.send_json({"event": "pong", "data": None})
                continue

            if event not in (
                OrderSocketEvent.JOIN_ORDER.value,
                OrderSocketEvent.LEAVE_ORDER.value,
            ):
                await websocket.send_json(
                    {"event": "error", "data": f"Unknown event: {event}"}
                )
                continue

            try:
                order_id = _parse_order_id(message.get("data"))
            except (TypeError, ValueError, OverflowError):
                await websocket.send_json({"event": "error", "data": "Invalid order id"})
                continue

            if event == OrderSocketEvent.JOIN_ORDER.value:
                manager.join(websocket, order_id)
                await websocket.send_json({"event": "joined", "data": order_id})
            else:
                manager.leave(websocket, order_id)
                await websocket.send_json({"event": "left", "data": order_id})

    except WebSocketDisconnect:
        logger.info("Client disconnected from order socket")
    finally:
        manager.disconnect(websocket)
