"""
Database Models Package

This module exports all SQLAlchemy models for the two-persona chat backend.

Tables:
1. messages - Text, voice and media messages with translation data
2. attachments - Media files attached to messages
3. reactions - Emoji reactions on messages
4. translation_provider_stats - Provider selection analytics
"""

from .database import (
    Base,
    build_engine,
    build_session_factory,
    init_db,
    reset_db,
    utcnow,
)

from .message import Message, Attachment, Reaction, MessageType, MediaType
from .provider_stat import TranslationProviderStat

__all__ = [
    # Database utilities
    "Base",
    "build_engine",
    "build_session_factory",
    "init_db",
    "reset_db",
    "utcnow",

    # Models
    "Message",
    "Attachment",
    "Reaction",
    "MessageType",
    "MediaType",
    "TranslationProviderStat",
]
