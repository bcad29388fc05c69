from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Integer, Float
from sqlalchemy.orm import relationship
import enum
import uuid

from .database import Base, utcnow


class MessageType(str, enum.Enum):
    TEXT = "text"
    VOICE = "voice"
    MEDIA = "media"


class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class Message(Base):
    """Chat message with its translation and transcription data"""
    __tablename__ = "messages"

    # Primary key
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    sender_persona_id = Column(String(32), nullable=False)

    # Message content
    original_text = Column(Text, nullable=True)
    original_locale = Column(String(10), nullable=True)

    # Translation data
    translated_text = Column(Text, nullable=True)
    translated_locale = Column(String(10), nullable=True)
    tone_adjusted_text = Column(Text, nullable=True)
    translation_provider = Column(String(32), nullable=True)

    # Voice data
    audio_url = Column(String(500), nullable=True)
    transcription_text = Column(Text, nullable=True)
    transcription_confidence = Column(Float, nullable=True)  # 0-1

    message_type = Column(String(10), nullable=False, default=MessageType.TEXT.value)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    attachments = relationship(
        "Attachment",
        order_by="Attachment.position",
        lazy="selectin",
        cascade="all, delete-orphan",
    )
    reactions = relationship(
        "Reaction",
        order_by="Reaction.created_at",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        """Convert to dictionary for JSON response"""
        return {
            "id": self.id,
            "sender_persona_id": self.sender_persona_id,
            "original_text": self.original_text,
            "original_locale": self.original_locale,
            "translated_text": self.translated_text,
            "translated_locale": self.translated_locale,
            "tone_adjusted_text": self.tone_adjusted_text,
            "translation_provider": self.translation_provider,
            "audio_url": self.audio_url,
            "transcription_text": self.transcription_text,
            "transcription_confidence": self.transcription_confidence,
            "message_type": self.message_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "media": [a.to_dict() for a in self.attachments],
            "reactions": [r.to_dict() for r in self.reactions],
        }

    def __repr__(self):
        return f"<Message {self.id} ({self.message_type}) from {self.sender_persona_id}>"


class Attachment(Base):
    """Media file attached to a message"""
    __tablename__ = "attachments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    message_id = Column(String(36), ForeignKey("messages.id", ondelete="CASCADE"), nullable=False, index=True)

    uri = Column(String(500), nullable=False)
    mime_type = Column(String(100), nullable=False)
    media_type = Column(String(10), nullable=False)

    # Upload order within the message
    position = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "message_id": self.message_id,
            "uri": self.uri,
            "mime_type": self.mime_type,
            "media_type": self.media_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Reaction(Base):
    """Emoji reaction left by a persona on a message"""
    __tablename__ = "reactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    message_id = Column(String(36), ForeignKey("messages.id", ondelete="CASCADE"), nullable=False, index=True)
    persona_id = Column(String(32), nullable=False)
    emoji = Column(String(16), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "message_id": self.message_id,
            "persona_id": self.persona_id,
            "emoji": self.emoji,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
