"""002: create authority table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE authority (
            id          SMALLINT        PRIMARY KEY DEFAULT 1,
            admin_id    VARCHAR(64)     NOT NULL,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_authority_singleton CHECK (id = 1)
        );
    """)
    op.execute("COMMENT ON TABLE authority IS 'Single administrative identity, created once, never updated';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS authority CASCADE;")
