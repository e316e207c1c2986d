"""kost_payment REST endpoints, all require JWT authentication.

POST /tenants/{tenant_id}/payments   — record a payment
GET  /tenants/{tenant_id}/payments   — payment history, newest first

No update or delete route exists: payments are immutable.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_common.database import get_db_session
from src.kost_common.response import ApiResponse, success_response
from src.kost_gateway.auth.dependencies import get_current_user
from src.kost_gateway.user.db_models import UserModel
from src.kost_payment.application.schemas import RecordPaymentRequest
from src.kost_payment.application.service import PaymentApplicationService

router = APIRouter(prefix="/tenants/{tenant_id}/payments", tags=["payments"])

_service = PaymentApplicationService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def record_payment(
    tenant_id: UUID,
    body: RecordPaymentRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.record_payment(
        db, str(tenant_id), body.amount, body.payment_date, body.notes
    )
    resp = success_response(data.model_dump(), message="Payment recorded")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_payments(
    tenant_id: UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100),
) -> ApiResponse:
    data = await _service.list_payments(db, str(tenant_id), cursor, limit)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
