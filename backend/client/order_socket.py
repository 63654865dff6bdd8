"""
Live order tracking over the ``/ws/orders`` WebSocket.

The socket joins the order room on every (re)connect and keeps the latest
order, driver and driver location it has been sent.
"""

import asyncio
import json
import logging
from typing import Any, Callable, Dict, Optional

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from .config import get_api_url

logger = logging.getLogger(__name__)

SOCKET_PATH = "/ws/orders"


def websocket_url(base_url: str) -> str:
    """``http(s)://host`` to ``ws(s)://host/ws/orders``"""
    if base_url.startswith("https://"):
        base_url = "wss://" + base_url[len("https://"):]
    elif base_url.startswith("http://"):
        base_url = "ws://" + base_url[len("http://"):]
    return base_url.rstrip("/") + SOCKET_PATH


class OrderSocket:
    """WebSocket client following one order, with reconnection"""

    def __init__(
        self,
        order_id: int,
        base_url: Optional[str] = None,
        reconnect_delay: float = 1.0,
        reconnect_delay_max: float = 5.0,
        max_reconnect_attempts: int = 5,
        connect: Callable = websockets.connect,
    ):
        self.order_id = order_id
        self.url = websocket_url(base_url or get_api_url())
        self.reconnect_delay = reconnect_delay
        self.reconnect_delay_max = reconnect_delay_max
        self.max_reconnect_attempts = max_reconnect_attempts
        self._connect = connect

        self.websocket = None
        self.reconnect_attempts = 0
        self._closing = False
        self._task: Optional[asyncio.Task] = None

        # Latest state pushed by the server
        self.order: Optional[Dict[str, Any]] = None
        self.driver: Optional[Dict[str, Any]] = None
        self.driver_location: Optional[Dict[str, Any]] = None
        self.is_connected = False

    def next_delay(self, attempt: int) -> float:
        """Delay before reconnect ``attempt`` (1-based): doubling, capped"""
        return min(
            self.reconnect_delay * (2 ** (attempt - 1)), self.reconnect_delay_max
        )

    async def emit(self, event: str, data: Any) -> None:
        await self.websocket.send(json.dumps({"event": event, "data": data}))

    def handle_message(self, raw: str) -> None:
        """Apply one server message to the tracked state"""
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring non-JSON message: {raw!r}")
            return

        if not isinstance(message, dict):
            logger.warning(f"Ignoring malformed message: {raw!r}")
            return

        event = message.get("event")
        data = message.get("data")

        if event == "order:update":
            logger.info(f"Order updated: {data}")
            self.order = data
        elif event == "driver:assigned":
            logger.info(f"Driver assigned: {data}")
            self.driver = data
        elif event == "driver:location":
            logger.debug(f"Driver location: {data}")
            self.driver_location = data
        elif event == "error":
            logger.warning(f"Server error: {data}")

    async def _listen(self) -> None:
        async for raw in self.websocket:
            self.handle_message(raw)

    async def run(self) -> None:
        """
        Connect and process events until ``close()`` or until the
        reconnection attempts are exhausted.
        """
        while not self._closing:
            try:
                self.websocket = await self._connect(self.url)
                if self._closing:
                    await self.websocket.close()
                    break
                self.is_connected = True
                self.reconnect_attempts = 0
                logger.info("Socket connected")

                await self.emit("join_order", self.order_id)
                await self._listen()
            except (
                ConnectionClosed,
                WebSocketException,
                OSError,
                asyncio.TimeoutError,
            ) as e:
                logger.warning(f"Socket connection lost: {e}")
            finally:
                self.is_connected = False

            if self._closing:
                break

            self.reconnect_attempts += 1
            if self.reconnect_attempts > self.max_reconnect_attempts:
                logger.error(
                    f"Giving up after {self.max_reconnect_attempts} reconnection attempts"
                )
                break

            delay = self.next_delay(self.reconnect_attempts)
            logger.info(
                f"Reconnecting in {delay} seconds "
                f"(attempt {self.reconnect_attempts}/{self.max_reconnect_attempts})"
            )
            await asyncio.sleep(delay)

        logger.info("Socket disconnected")

    def start(self) -> asyncio.Task:
        """Run the socket in a background task"""
        self._task = asyncio.create_task(self.run())
        return self._task

    async def close(self) -> None:
        """Leave the order room and disconnect"""
        self._closing = True
        if self.websocket is not None and self.is_connected:
            try:
                await self.emit("leave_order", self.order_id)
            except ConnectionClosed:
                logger.debug("Connection already closed before leave_order")
            await self.websocket.close()
        self.is_connected = False

        if self._task is not None:
            await self._task
            self._task = None
