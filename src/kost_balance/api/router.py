"""kost_balance REST endpoints, all require JWT authentication.

GET /tenants/balances              — paginated balances, optional paid/unpaid filter
GET /tenants/{tenant_id}/balance   — one tenant's balance

Error mapping: tenant missing → 404, no room → 400, dangling room → 500.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.kost_balance.application.service import BalanceApplicationService
from src.kost_common.database import get_db_session
from src.kost_common.enums import BalanceStatus
from src.kost_common.response import ApiResponse, success_response
from src.kost_gateway.auth.dependencies import get_current_user
from src.kost_gateway.user.db_models import UserModel

router = APIRouter(prefix="/tenants", tags=["balances"])

_service = BalanceApplicationService()


@router.get("/balances")
async def list_balances(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    status: BalanceStatus | None = Query(None, description="paid or unpaid"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.BALANCE_PAGE_SIZE, ge=1, le=100),
    include_moved_out: bool = Query(False),
) -> ApiResponse:
    data = await _service.list_balances(
        db,
        status.value if status is not None else None,
        page,
        page_size,
        include_moved_out,
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{tenant_id}/balance")
async def get_balance(
    tenant_id: UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_balance(db, str(tenant_id))
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
