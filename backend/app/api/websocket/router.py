"""
WebSocket Router - Live message updates

Clients connect here to receive ``message:new``, ``message:updated``,
``reaction:new`` and ``presence:update`` events.
"""
import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query

from app.services.connection import ConnectionManager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def ws_endpoint(
    websocket: WebSocket,
    persona_id: Optional[str] = Query(None),
):
    """
    WebSocket endpoint for live updates.

    Query Parameters:
        persona_id: Persona of the connecting client (optional, informational)

    Message Types (JSON, client -> server):
        - ping: answered with ``{"type": "pong"}``

    Events (server -> client):
        ``{"type": <event>, "payload": {...}}``
    """
    manager: ConnectionManager = websocket.app.state.connection_manager
    conn = await manager.connect(websocket, persona_id=persona_id)
    try:
        while True:
            data = await websocket.receive_json()
            if isinstance(data, dict) and data.get("type") == "ping":
                await conn.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    except ValueError as e:
        logger.warning(f"[WebSocket] Invalid message from client {conn.id}: {e}")
    finally:
        manager.disconnect(conn.id)
