"""005: create positions table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE positions (
            market_id   u64             NOT NULL REFERENCES markets (market_id),
            bettor_id   VARCHAR(64)     NOT NULL,
            commitment  BYTEA           NOT NULL,
            amount      u64             NOT NULL,
            claimed     BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            claimed_at  TIMESTAMPTZ,
            CONSTRAINT pk_positions                 PRIMARY KEY (market_id, bettor_id),
            CONSTRAINT ck_positions_commitment_len  CHECK (octet_length(commitment) = 32),
            CONSTRAINT ck_positions_amount_gt_0     CHECK (amount > 0),
            CONSTRAINT ck_positions_claimed_at      CHECK (claimed = (claimed_at IS NOT NULL))
        );
    """)
    op.execute("CREATE INDEX idx_positions_bettor ON positions (bettor_id);")
    op.execute("COMMENT ON TABLE positions IS 'One hidden-side position per (market, bettor); side revealed only at claim';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS positions CASCADE;")
