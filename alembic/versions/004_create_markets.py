"""004: create markets table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE markets (
            market_id       u64             PRIMARY KEY,
            creator_id      VARCHAR(64)     NOT NULL,
            question        TEXT            NOT NULL,
            deadline        TIMESTAMPTZ     NOT NULL,
            status          VARCHAR(20)     NOT NULL DEFAULT 'OPEN',
            outcome         BOOLEAN,
            total_pool      u64             NOT NULL DEFAULT 0,
            total_yes_pool  u64             NOT NULL DEFAULT 0,
            total_no_pool   u64             NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            resolved_at     TIMESTAMPTZ,
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_markets_question_len  CHECK (octet_length(question) <= 200),
            CONSTRAINT ck_markets_status        CHECK (status IN ('OPEN', 'RESOLVED')),
            CONSTRAINT ck_markets_outcome       CHECK ((outcome IS NULL) = (status = 'OPEN')),
            CONSTRAINT ck_markets_pools         CHECK (total_yes_pool + total_no_pool <= total_pool)
        );
    """)
    op.execute("CREATE INDEX idx_markets_status ON markets (status);")
    op.execute("""
        CREATE TRIGGER trg_markets_updated_at
            BEFORE UPDATE ON markets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE markets IS 'Binary markets: lifecycle, pools, deadline, resolved outcome';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS markets CASCADE;")
