"""
Core Infrastructure Module

This module contains shared infrastructure components used across the application:
- MessageRepository: messages, attachments and reactions
- TranslationStatsRepository: atomic provider selection counters

Usage:
    from app.services.core import MessageRepository, TranslationStatsRepository
"""

from app.services.core.repositories import (
    MessageRepository,
    TranslationStatsRepository,
    VoiceFields,
)

__all__ = [
    "MessageRepository",
    "TranslationStatsRepository",
    "VoiceFields",
]
