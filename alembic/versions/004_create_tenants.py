"""004: create tenants table

Revision ID: 004
Revises: 003
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE tenants (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            name            VARCHAR(100)    NOT NULL,
            contact_info    VARCHAR(255),
            room_id         UUID            REFERENCES rooms (id) ON DELETE RESTRICT,
            moved_out_at    TIMESTAMPTZ,
            moved_out_rent  NUMERIC(14, 2),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_tenants_moved_out_rent CHECK (
                moved_out_rent IS NULL OR (moved_out_at IS NOT NULL AND moved_out_rent > 0)
            )
        );
    """)
    # At most one active tenant per room
    op.execute("""
        CREATE UNIQUE INDEX uq_tenants_active_room
        ON tenants (room_id)
        WHERE room_id IS NOT NULL AND moved_out_at IS NULL;
    """)
    op.execute("CREATE INDEX idx_tenants_created ON tenants (created_at DESC, id DESC);")
    op.execute("""
        CREATE TRIGGER trg_tenants_updated_at
            BEFORE UPDATE ON tenants
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute(
        "COMMENT ON TABLE tenants IS "
        "'Soft-deleted on move-out: room_id kept as last assignment, rent frozen in moved_out_rent';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS tenants CASCADE;")
