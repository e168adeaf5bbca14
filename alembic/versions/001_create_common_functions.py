"""001: create common functions

Revision ID: 001
Revises: 
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    # u64 domain shared by ids, stakes, pools and balances
    op.execute("""
        CREATE DOMAIN u64 AS NUMERIC(20, 0)
            CHECK (VALUE >= 0 AND VALUE <= 18446744073709551615);
    """)


def downgrade() -> None:
    op.execute("DROP DOMAIN IF EXISTS u64;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
