"""005: create payments table

Revision ID: 005
Revises: 004
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE payments (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            tenant_id       UUID            NOT NULL REFERENCES tenants (id) ON DELETE RESTRICT,
            amount          NUMERIC(14, 2)  NOT NULL,
            payment_date    DATE            NOT NULL,
            notes           VARCHAR(500),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_payments_amount_gt_0 CHECK (amount > 0)
        );
    """)
    # Covers both the per-tenant SUM and the newest-first history listing
    op.execute("""
        CREATE INDEX idx_payments_tenant_date
        ON payments (tenant_id, payment_date DESC, created_at DESC, id DESC);
    """)
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_payments_immutable()
        RETURNS TRIGGER AS $$
        BEGIN
            RAISE EXCEPTION 'payments is append-only';
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TRIGGER trg_payments_immutable
            BEFORE UPDATE OR DELETE ON payments
            FOR EACH ROW EXECUTE FUNCTION fn_payments_immutable();
    """)
    op.execute("COMMENT ON TABLE payments IS 'Append-Only rent payments, amounts in Rupiah';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS payments CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_payments_immutable();")
