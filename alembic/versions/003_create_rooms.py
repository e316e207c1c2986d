"""003: create rooms table

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE rooms (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            room_number     VARCHAR(20)     NOT NULL,
            room_type       VARCHAR(50)     NOT NULL,
            monthly_rent    NUMERIC(14, 2)  NOT NULL,
            status          VARCHAR(20)     NOT NULL DEFAULT 'available',
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_rooms_room_number  UNIQUE (room_number),
            CONSTRAINT ck_rooms_rent_gt_0    CHECK (monthly_rent > 0),
            CONSTRAINT ck_rooms_status CHECK (
                status IN ('available', 'occupied', 'under_renovation')
            )
        );
    """)
    op.execute("CREATE INDEX idx_rooms_status ON rooms (status);")
    op.execute("""
        CREATE TRIGGER trg_rooms_updated_at
            BEFORE UPDATE ON rooms
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON TABLE rooms IS 'Rentable units; monthly_rent in Rupiah, 2 decimals';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS rooms CASCADE;")
