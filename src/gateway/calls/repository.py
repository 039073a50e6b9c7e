"""
Call record store operations.
"""

from datetime import datetime, timezone
from typing import Any, Protocol
from uuid import UUID

from sqlalchemy import delete, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.calls.models import CallRecord
from gateway.shared.exceptions import NotFoundError, StoreError

# Store column name -> mapped attribute ("metadata" is stored as call_metadata).
_COLUMN_ATTRIBUTES: dict[str, str] = {
    column.name: key for key, column in inspect(CallRecord).columns.items()
}
_IMMUTABLE_COLUMNS = frozenset({"id", "created_at"})


class CallRecordRepositoryProtocol(Protocol):
    """Protocol for call record mutations."""

    async def update(self, record_id: UUID, fields: dict[str, Any]) -> CallRecord:
        """Apply a partial update and return the updated record."""
        ...

    async def delete(self, record_id: UUID) -> int:
        """Delete a record; returns the number of rows removed."""
        ...


class CallRecordRepository:
    """Repository for call record updates and deletes."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session.
        """
        self._session = session

    async def get_by_id(self, record_id: UUID) -> CallRecord | None:
        try:
            result = await self._session.execute(select(CallRecord).where(CallRecord.id == record_id))
        except SQLAlchemyError as e:
            raise StoreError("Call record lookup failed", {"error": str(e)}) from e
        return result.scalar_one_or_none()

    async def update(self, record_id: UUID, fields: dict[str, Any]) -> CallRecord:
        """Apply `fields` to the record and commit.

        Keys are store column names. `id` and `created_at` are never written.

        Raises:
            NotFoundError: If no record has this id.
            StoreError: If a key names no column or the write fails.
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise NotFoundError(f"Call record {record_id} not found", {"id": str(record_id)})

        changes = {k: v for k, v in fields.items() if k not in _IMMUTABLE_COLUMNS}
        unknown = sorted(k for k in changes if k not in _COLUMN_ATTRIBUTES)
        if unknown:
            raise StoreError(
                f"Could not find the '{unknown[0]}' column of 'call_logs'",
                {"columns": unknown},
            )
        if not changes:
            return record

        for column, value in changes.items():
            setattr(record, _COLUMN_ATTRIBUTES[column], value)
        record.updated_at = datetime.now(timezone.utc)

        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StoreError("Call record update failed", {"error": str(e)}) from e
        await self._session.refresh(record)
        return record

    async def delete(self, record_id: UUID) -> int:
        try:
            result = await self._session.execute(delete(CallRecord).where(CallRecord.id == record_id))
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StoreError("Call record delete failed", {"error": str(e)}) from e
        return result.rowcount or 0
