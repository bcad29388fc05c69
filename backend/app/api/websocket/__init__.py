"""
WebSocket API module.

Provides the WebSocket router for live message updates.
"""
from .router import router

__all__ = ["router"]
