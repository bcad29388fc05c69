"""
Connection Models

Data classes representing WebSocket connections.
"""
import uuid
from datetime import datetime, UTC
from typing import Dict, Any, Optional
import logging

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ClientConnection:
    """Represents a single live-update WebSocket client."""

    def __init__(self, websocket: WebSocket, persona_id: Optional[str] = None):
        self.id = str(uuid.uuid4())
        self.websocket = websocket
        self.persona_id = persona_id
        self.connected_at = datetime.now(UTC)

    async def send_json(self, data: Dict[str, Any]) -> bool:
        """Send JSON message to this connection."""
        try:
            await self.websocket.send_json(data)
            return True
        except Exception as e:
            logger.error(f"Error sending JSON to client {self.id}: {e}")
            return False
