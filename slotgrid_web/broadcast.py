"""Fan-out of grid snapshots to connected WebSocket viewers."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any

from starlette.websockets import WebSocket

logger = logging.getLogger(__name__)

BROADCAST_TIMEOUT = float(os.getenv("SLOTGRID_BROADCAST_TIMEOUT", "5"))


class BroadcastHub:
    """Registry of open viewer connections.

    Sends are bounded by ``timeout`` seconds per socket; sockets that time
    out or fail are closed and removed so they never hold up later updates.
    """

    def __init__(self, timeout: float = BROADCAST_TIMEOUT):
        self.timeout = timeout
        self._sockets: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return len(self._sockets)

    async def connect(self, ws: WebSocket) -> None:
        async with self._lock:
            self._sockets.add(ws)
        logger.debug("Viewer connected (%s open)", len(self._sockets))

    async def disconnect(self, ws: WebSocket) -> None:
        async with self._lock:
            self._sockets.discard(ws)
        logger.debug("Viewer disconnected (%s open)", len(self._sockets))

    async def send(self, ws: WebSocket, message: dict[str, Any]) -> bool:
        """Send ``message`` to one socket; return ``False`` if it failed."""

        try:
            await asyncio.wait_for(ws.send_json(message), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("WebSocket send timeout, disconnecting slow viewer")
            try:
                await ws.close(code=1008, reason="Send timeout")
            except Exception:  # noqa: BLE001 - socket may already be gone
                logger.debug("Closing slow viewer failed", exc_info=True)
            return False
        except Exception as exc:  # noqa: BLE001
            logger.debug("Broadcast error: %s", exc)
            return False
        return True

    async def publish(self, snapshot: dict[str, Any]) -> int:
        """Deliver ``snapshot`` to every viewer; return the number reached."""

        async with self._lock:
            sockets = list(self._sockets)
        if not sockets:
            return 0

        message = {"type": "stateUpdated", "state": snapshot}
        results = await asyncio.gather(*(self.send(ws, message) for ws in sockets))
        dead = [ws for ws, ok in zip(sockets, results) if not ok]
        if dead:
            async with self._lock:
                for ws in dead:
                    self._sockets.discard(ws)
            logger.warning("Dropped %s unreachable viewers", len(dead))
        return len(sockets) - len(dead)
