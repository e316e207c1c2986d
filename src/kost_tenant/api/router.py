"""kost_tenant REST endpoints, all require JWT authentication.

POST  /tenants                        — create
GET   /tenants                        — list (active only unless include_moved_out)
GET   /tenants/{tenant_id}            — detail
PATCH /tenants/{tenant_id}            — update name / contact info
PUT   /tenants/{tenant_id}/room       — assign or reassign a room
POST  /tenants/{tenant_id}/move-out   — soft-delete
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_common.database import get_db_session
from src.kost_common.response import ApiResponse, success_response
from src.kost_gateway.auth.dependencies import get_current_user
from src.kost_gateway.user.db_models import UserModel
from src.kost_tenant.application.schemas import (
    AssignRoomRequest,
    CreateTenantRequest,
    UpdateTenantRequest,
)
from src.kost_tenant.application.service import TenantApplicationService

router = APIRouter(prefix="/tenants", tags=["tenants"])

_service = TenantApplicationService()


def _wrap(request: Request, data: object, message: str = "success") -> ApiResponse:
    resp = success_response(data, message=message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_tenant(
    body: CreateTenantRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_tenant(db, body.name, body.contact_info)
    return _wrap(request, result.model_dump(), "Tenant created")


@router.get("")
async def list_tenants(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    include_moved_out: bool = Query(False),
    limit: int = Query(20, ge=1, le=100),
    cursor: str | None = Query(None),
) -> ApiResponse:
    result = await _service.list_tenants(db, include_moved_out, cursor, limit)
    return _wrap(request, result.model_dump())


@router.get("/{tenant_id}")
async def get_tenant(
    tenant_id: UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_tenant(db, str(tenant_id))
    return _wrap(request, result.model_dump())


@router.patch("/{tenant_id}")
async def update_tenant(
    tenant_id: UUID,
    body: UpdateTenantRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_tenant(db, str(tenant_id), body.name, body.contact_info)
    return _wrap(request, result.model_dump(), "Tenant updated")


@router.put("/{tenant_id}/room")
async def assign_room(
    tenant_id: UUID,
    body: AssignRoomRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.assign_room(db, str(tenant_id), str(body.room_id))
    return _wrap(request, result.model_dump(), "Room assigned")


@router.post("/{tenant_id}/move-out")
async def move_out(
    tenant_id: UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.move_out(db, str(tenant_id))
    return _wrap(request, result.model_dump(), "Tenant moved out")
