"""
Connection Management Module

Exports ConnectionManager and ClientConnection. The manager is built once
at startup and injected wherever events are published.
"""
from .models import ClientConnection
from .manager import ConnectionManager

__all__ = [
    "ClientConnection",
    "ConnectionManager",
]
