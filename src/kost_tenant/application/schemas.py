"""Pydantic schemas and cursor utilities for kost_tenant API.

Cursor format (UUID PK, not sequential):
  {"ts": "<created_at ISO>", "id": "<tenant_id>"} encoded as Base64 JSON.
"""

import base64
import json
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.kost_common.money import money_to_display, money_to_str
from src.kost_tenant.domain.models import Tenant

# ---------------------------------------------------------------------------
# Cursor utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_tenant: Tenant) -> str:
    payload = {
        "ts": last_tenant.created_at.isoformat() if last_tenant.created_at else None,
        "id": last_tenant.id,
    }
    return base64.b64encode(json.dumps(payload).encode()).decode()


def cursor_decode(cursor: str | None) -> tuple[datetime | None, str | None]:
    """Decode composite cursor -> (created_at, tenant_id), or (None, None) on error."""
    if cursor is None:
        return None, None
    try:
        data = json.loads(base64.b64decode(cursor.encode()).decode())
        return datetime.fromisoformat(data["ts"]), str(UUID(data["id"]))
    except Exception:
        return None, None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateTenantRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    contact_info: str | None = Field(None, max_length=255)


class UpdateTenantRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    contact_info: str | None = Field(None, max_length=255)


class AssignRoomRequest(BaseModel):
    room_id: UUID


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TenantDetail(BaseModel):
    id: str
    name: str
    contact_info: str | None
    room_id: str | None
    is_active: bool
    moved_out_at: str | None
    moved_out_rent: str | None
    moved_out_rent_display: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, tenant: Tenant) -> "TenantDetail":
        rent = tenant.moved_out_rent
        return cls(
            id=tenant.id,
            name=tenant.name,
            contact_info=tenant.contact_info,
            room_id=tenant.room_id,
            is_active=tenant.is_active,
            moved_out_at=tenant.moved_out_at.isoformat() if tenant.moved_out_at else None,
            moved_out_rent=money_to_str(rent) if rent is not None else None,
            moved_out_rent_display=money_to_display(rent) if rent is not None else None,
            created_at=tenant.created_at.isoformat() if tenant.created_at else "",
            updated_at=tenant.updated_at.isoformat() if tenant.updated_at else "",
        )


class TenantListResponse(BaseModel):
    items: list[TenantDetail]
    next_cursor: str | None
    has_more: bool
