"""
Conversation log writes.
"""

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.messaging.models import ConversationMessage
from gateway.shared.exceptions import StoreError


class ConversationRepositoryProtocol(Protocol):
    """Protocol for conversation log writes."""

    async def add(self, message: ConversationMessage) -> ConversationMessage:
        """Persist one conversation message."""
        ...


class ConversationRepository:
    """Appends messages to the SMS conversation log."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, message: ConversationMessage) -> ConversationMessage:
        """Insert and commit a message.

        Raises:
            StoreError: If the insert fails; the session is rolled back.
        """
        self._session.add(message)
        try:
            await self._session.commit()
            await self._session.refresh(message)
        except (SQLAlchemyError, OSError) as e:
            # asyncpg surfaces an unreachable store as a bare OSError.
            await self._session.rollback()
            raise StoreError("Conversation log write failed", {"error": str(e)}) from e
        return message
