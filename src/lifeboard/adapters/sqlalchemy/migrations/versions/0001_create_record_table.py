"""Create the record table.

Revision ID: 0001
Revises:
Create Date: 2026-02-14
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from lifeboard.adapters.sqlalchemy.mappings import (
    ACTIVE_KEY_INDEX,
    ACTIVE_ONLY_POSTGRESQL,
    ACTIVE_ONLY_SQLITE,
    StringListType,
    StringSetType,
    UTCDateTime,
)

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "record",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("normalized_title", sa.String(), nullable=False),
        sa.Column("canonical_key", sa.String(), nullable=False),
        sa.Column("normalized_date", sa.String(), nullable=True),
        sa.Column("normalized_time", sa.String(), nullable=True),
        sa.Column("date", sa.String(), nullable=True),
        sa.Column("time", sa.String(), nullable=True),
        sa.Column("end_time", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("urgency", sa.String(length=16), nullable=False),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("people", StringListType(), nullable=False),
        sa.Column("source_hashes", StringSetType(), nullable=False),
        sa.Column("occurrence_count", sa.Integer(), nullable=False),
        sa.Column("raw_text", sa.Text(), nullable=True),
        sa.Column("retired", sa.Boolean(), nullable=False),
        sa.Column("last_seen_at", UTCDateTime(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_record")),
    )
    op.create_index(
        op.f("ix_record_owner_id"),
        "record",
        ["owner_id", "retired", "type", "normalized_title"],
        unique=False,
    )
    op.create_index(
        ACTIVE_KEY_INDEX,
        "record",
        ["owner_id", "canonical_key"],
        unique=True,
        sqlite_where=sa.text(ACTIVE_ONLY_SQLITE),
        postgresql_where=sa.text(ACTIVE_ONLY_POSTGRESQL),
    )


def downgrade() -> None:
    op.drop_index(ACTIVE_KEY_INDEX, table_name="record")
    op.drop_index(op.f("ix_record_owner_id"), table_name="record")
    op.drop_table("record")
