"""
Schemas Package

Pydantic models for API requests.
"""

from app.schemas.messages import (
    PersonaId,
    TextMessageRequest,
    ReactionRequest,
    PersonaActivateRequest,
)

__all__ = [
    "PersonaId",
    "TextMessageRequest",
    "ReactionRequest",
    "PersonaActivateRequest",
]
