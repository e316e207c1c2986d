"""kost_room REST endpoints, all require JWT authentication.

POST   /rooms               — create
GET    /rooms               — list with cursor pagination
GET    /rooms/{room_id}     — detail
PATCH  /rooms/{room_id}     — update type / rent / renovation status
DELETE /rooms/{room_id}     — delete (only if no tenant ever referenced it)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_common.database import get_db_session
from src.kost_common.enums import RoomStatus
from src.kost_common.response import ApiResponse, success_response
from src.kost_gateway.auth.dependencies import get_current_user
from src.kost_gateway.user.db_models import UserModel
from src.kost_room.application.schemas import CreateRoomRequest, UpdateRoomRequest
from src.kost_room.application.service import RoomApplicationService

router = APIRouter(prefix="/rooms", tags=["rooms"])

_service = RoomApplicationService()


def _wrap(request: Request, data: object, message: str = "success") -> ApiResponse:
    resp = success_response(data, message=message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_room(
    body: CreateRoomRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_room(
        db, body.room_number, body.room_type, body.monthly_rent, body.status
    )
    return _wrap(request, result.model_dump(), "Room created")


@router.get("")
async def list_rooms(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    status: RoomStatus | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    cursor: str | None = Query(None),
) -> ApiResponse:
    result = await _service.list_rooms(
        db, status.value if status is not None else None, cursor, limit
    )
    return _wrap(request, result.model_dump())


@router.get("/{room_id}")
async def get_room(
    room_id: UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_room(db, str(room_id))
    return _wrap(request, result.model_dump())


@router.patch("/{room_id}")
async def update_room(
    room_id: UUID,
    body: UpdateRoomRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_room(
        db, str(room_id), body.room_type, body.monthly_rent, body.status
    )
    return _wrap(request, result.model_dump(), "Room updated")


@router.delete("/{room_id}")
async def delete_room(
    room_id: UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete_room(db, str(room_id))
    return _wrap(request, {"id": str(room_id)}, "Room deleted")
