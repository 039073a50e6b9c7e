"""
Call record mutation endpoints.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.auth.middleware import CurrentPrincipalDep
from gateway.calls.repository import CallRecordRepository
from gateway.calls.schemas import CallRecordOut, CallRecordResponse, DeleteResponse
from gateway.calls.service import CallLogService
from gateway.shared.database import get_db_session

router = APIRouter(prefix="/api/portal/calls", tags=["calls"])


def get_call_log_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> CallLogService:
    """Dependency for the call log service."""
    return CallLogService(CallRecordRepository(session))


@router.patch("/{record_id}", response_model=CallRecordResponse, response_model_by_alias=True)
async def update_call_record(
    record_id: UUID,
    principal: CurrentPrincipalDep,
    service: Annotated[CallLogService, Depends(get_call_log_service)],
    fields: Annotated[dict[str, Any], Body()],
) -> CallRecordResponse:
    record = await service.update_call_record(principal, record_id, fields)
    return CallRecordResponse(log=CallRecordOut.model_validate(record))


@router.delete("/{record_id}", response_model=DeleteResponse)
async def delete_call_record(
    record_id: UUID,
    principal: CurrentPrincipalDep,
    service: Annotated[CallLogService, Depends(get_call_log_service)],
) -> DeleteResponse:
    await service.delete_call_record(principal, record_id)
    return DeleteResponse()
