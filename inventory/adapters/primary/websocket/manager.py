"""
WebSocket connection manager for live item streams.

Keeps the connected clients of every channel ("items", "item:<id>") so a
failed send drops only that client.
"""

import logging
from typing import Dict, Set
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Tracks open WebSocket connections per channel.
    """

    def __init__(self):
        # Active connections: {channel: {websocket, ...}}
        self.connections: Dict[str, Set[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, channel: str):
        await websocket.accept()
        self.connections.setdefault(channel, set()).add(websocket)
        logger.info("Client connected to %s (%d open)", channel, len(self.connections[channel]))

    def disconnect(self, websocket: WebSocket, channel: str):
        clients = self.connections.get(channel)
        if clients and websocket in clients:
            clients.discard(websocket)
            if not clients:
                del self.connections[channel]
            logger.info("Client disconnected from %s", channel)

    async def send_message(self, websocket: WebSocket, channel: str, message: dict) -> bool:
        """
        Sends a JSON message to one client.

        Returns:
            False if the send failed and the client was dropped
        """
        try:
            await websocket.send_json(message)
            return True
        except Exception as e:
            logger.warning("Error sending to client on %s: %s", channel, e)
            self.disconnect(websocket, channel)
            return False

    def connection_count(self, channel: str) -> int:
        return len(self.connections.get(channel, ()))


# Global manager instance
manager = ConnectionManager()
