"""
Repository Layer - Centralized database queries.

This module provides a repository pattern for database access,
keeping SQLAlchemy out of the translation and voice-processing core and
giving it a narrow contract to persist through.

All database failures are raised as PersistenceError.

Usage:
    from app.services.core.repositories import MessageRepository

    messages = MessageRepository(session_factory)
    recent = await messages.list(limit=5)
"""

import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.models.message import Message, Reaction
from app.models.provider_stat import TranslationProviderStat
from app.services.exceptions import PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoiceFields:
    """Fields the voice pipeline writes once processing is done."""
    original_text: Optional[str] = None
    translated_text: Optional[str] = None
    translated_locale: Optional[str] = None
    tone_adjusted_text: Optional[str] = None
    translation_provider: Optional[str] = None
    transcription_text: Optional[str] = None
    transcription_confidence: Optional[float] = None


class MessageRepository:
    """
    Repository for messages, their attachments, and reactions.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def create(self, message: Message) -> Message:
        """
        Insert a message together with the attachments already set on it.

        Args:
            message: Transient Message; ``attachments`` and ``reactions``
                     should be assigned (possibly empty)

        Returns:
            The persisted message
        """
        try:
            async with self._session_factory() as db:
                db.add(message)
                await db.commit()
            return message
        except SQLAlchemyError as e:
            logger.error(f"Error creating message {message.id}: {e}")
            raise PersistenceError(f"Could not create message: {e}") from e

    async def get(self, message_id: str) -> Optional[Message]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(select(Message).where(Message.id == message_id))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting message {message_id}: {e}")
            raise PersistenceError(f"Could not load message {message_id}: {e}") from e

    async def exists(self, message_id: str) -> bool:
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(func.count()).select_from(Message).where(Message.id == message_id)
                )
                return result.scalar_one() > 0
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not look up message {message_id}: {e}") from e

    async def list(self, limit: int = 50, offset: int = 0) -> List[Message]:
        """
        Messages newest first, with attachments and reactions loaded.
        """
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(Message)
                    .order_by(Message.created_at.desc(), Message.id.desc())
                    .limit(limit)
                    .offset(offset)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing messages: {e}")
            raise PersistenceError(f"Could not list messages: {e}") from e

    async def update_voice_fields(self, message_id: str, fields: VoiceFields):
        """
        Apply the voice post-processing fields in a single UPDATE.

        Raises:
            PersistenceError: the update failed or the message is gone
        """
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    update(Message)
                    .where(Message.id == message_id)
                    .values(**asdict(fields))
                )
                updated = result.rowcount
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error updating voice fields of {message_id}: {e}")
            raise PersistenceError(f"Could not update message {message_id}: {e}") from e

        if updated == 0:
            raise PersistenceError(f"Message {message_id} not found")

    async def add_reaction(self, reaction: Reaction) -> Reaction:
        try:
            async with self._session_factory() as db:
                db.add(reaction)
                await db.commit()
            return reaction
        except SQLAlchemyError as e:
            logger.error(f"Error adding reaction to {reaction.message_id}: {e}")
            raise PersistenceError(f"Could not add reaction: {e}") from e


class TranslationStatsRepository:
    """
    Storage for translation provider selection counters.

    ``upsert`` is one INSERT ... ON CONFLICT DO UPDATE statement, so the
    increment happens inside the database and concurrent writers never
    overwrite each other.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @staticmethod
    def _insert_for(dialect_name: str):
        if dialect_name == "postgresql":
            return postgresql.insert
        if dialect_name == "sqlite":
            return sqlite.insert
        raise PersistenceError(f"Atomic upsert not supported on {dialect_name}")

    async def upsert(
        self,
        provider: str,
        count: int,
        latency_sum_ms: int,
        timestamp: datetime,
    ):
        try:
            async with self._session_factory() as db:
                insert = self._insert_for(db.bind.dialect.name)
                stmt = insert(TranslationProviderStat).values(
                    provider=provider,
                    selection_count=count,
                    total_latency_ms=latency_sum_ms,
                    last_selected_at=timestamp,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[TranslationProviderStat.provider],
                    set_={
                        "selection_count": TranslationProviderStat.selection_count + stmt.excluded.selection_count,
                        "total_latency_ms": TranslationProviderStat.total_latency_ms + stmt.excluded.total_latency_ms,
                        "last_selected_at": stmt.excluded.last_selected_at,
                    },
                )
                await db.execute(stmt)
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error recording selection of {provider}: {e}")
            raise PersistenceError(f"Could not record selection of {provider}: {e}") from e

    async def list(self) -> List[TranslationProviderStat]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(TranslationProviderStat).order_by(TranslationProviderStat.provider)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not list provider stats: {e}") from e
