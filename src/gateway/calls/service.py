"""
Call record mutations on behalf of an authenticated principal.

Only authentication is checked here: a principal may update or delete any
call record by id regardless of which tenant it belongs to.
"""

from typing import Any
from uuid import UUID

from gateway.auth.middleware import Principal
from gateway.calls.models import CallRecord
from gateway.calls.repository import CallRecordRepositoryProtocol
from gateway.shared.logging import get_logger

logger = get_logger(__name__)


class CallLogService:
    def __init__(self, repository: CallRecordRepositoryProtocol) -> None:
        self._repository = repository

    async def update_call_record(
        self,
        principal: Principal,
        record_id: UUID,
        fields: dict[str, Any],
    ) -> CallRecord:
        """Apply a partial update to a call record.

        Raises:
            NotFoundError: If the record does not exist.
            StoreError: If a field names no column or the store write fails.
        """
        record = await self._repository.update(record_id, fields)
        logger.info(
            "Call record updated",
            extra={
                "principal_id": principal.id,
                "call_id": str(record_id),
                "fields": sorted(k for k in fields if k != "id"),
            },
        )
        return record

    async def delete_call_record(self, principal: Principal, record_id: UUID) -> None:
        """Delete a call record. Deleting a missing record is not an error."""
        deleted = await self._repository.delete(record_id)
        logger.info(
            "Call record deleted",
            extra={"principal_id": principal.id, "call_id": str(record_id), "deleted": deleted},
        )
