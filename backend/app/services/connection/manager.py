"""
Connection Manager

Core WebSocket connection management:
- Connection/disconnection handling
- Event publication to every connected client

Publishing is best effort: a client whose send fails is dropped and the
event is not retried. Publishes are serialized, so every client sees
events in the order they were published.
"""
import asyncio
from typing import Dict, Any, Optional
import logging

from fastapi import WebSocket

from .models import ClientConnection

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages all live-update WebSocket connections.

    Implements the notifier contract: ``publish(event, payload)``.
    """

    def __init__(self):
        # connection id -> ClientConnection
        self._connections: Dict[str, ClientConnection] = {}
        self._publish_lock = asyncio.Lock()

    # === Core Connection Methods ===

    async def connect(self, websocket: WebSocket, persona_id: Optional[str] = None) -> ClientConnection:
        """Accept and register a new WebSocket connection."""
        await websocket.accept()
        conn = ClientConnection(websocket=websocket, persona_id=persona_id)
        self._connections[conn.id] = conn
        logger.info(f"Client {conn.id} connected (persona={persona_id})")
        return conn

    def disconnect(self, connection_id: str) -> bool:
        """Remove a connection."""
        conn = self._connections.pop(connection_id, None)
        if conn:
            logger.info(f"Client {connection_id} disconnected")
        return conn is not None

    # === Broadcast Methods ===

    async def publish(self, event: str, payload: Dict[str, Any]) -> int:
        """Send ``{"type": event, "payload": payload}`` to every client."""
        message = {"type": event, "payload": payload}

        async with self._publish_lock:
            sent_count = 0
            for conn in list(self._connections.values()):
                if await conn.send_json(message):
                    sent_count += 1
                else:
                    self.disconnect(conn.id)

        logger.debug(f"Published {event} to {sent_count} client(s)")
        return sent_count

    # === Query Methods ===

    def get_total_connections(self) -> int:
        return len(self._connections)
