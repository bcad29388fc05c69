"""
Message API Schemas

Pydantic models for request validation.
"""

from typing import Literal

from pydantic import BaseModel, Field

from app.config.constants import REACTION_EMOJI_MAX_LENGTH, TEXT_MESSAGE_MAX_LENGTH

PersonaId = Literal["khadija", "brian"]


class TextMessageRequest(BaseModel):
    persona_id: PersonaId
    text: str = Field(..., min_length=1, max_length=TEXT_MESSAGE_MAX_LENGTH)


class ReactionRequest(BaseModel):
    persona_id: PersonaId
    emoji: str = Field(..., min_length=1, max_length=REACTION_EMOJI_MAX_LENGTH)


class PersonaActivateRequest(BaseModel):
    persona_id: PersonaId
