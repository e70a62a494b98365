"""Registration schema baseline

Revision ID: 20261019_01
Revises: None
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table(
        "assembly",
        sa.Column("assembly_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'active'")),
        sa.Column("created_by", sa.Text(), nullable=False),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("last_updated_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("last_updated_by", sa.Text(), nullable=False),
        sa.Column("registration_open", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("registration_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("payment_required", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.CheckConstraint("type in ('AG', 'AGE')", name="ck_assembly_type"),
        sa.CheckConstraint("status in ('active', 'archived')", name="ck_assembly_status"),
        sa.CheckConstraint("end_date >= start_date", name="ck_assembly_date_range"),
        sa.CheckConstraint("max_participants IS NULL OR max_participants > 0", name="ck_assembly_max_participants"),
    )
    op.create_index("ix_assembly_status_start_date", "assembly", ["status", "start_date"])

    op.create_table(
        "registration_modality",
        sa.Column("modality_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("assembly_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("assembly.assembly_id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("price >= 0", name="ck_registration_modality_price"),
    )
    op.create_index("ix_registration_modality_assembly", "registration_modality", ["assembly_id"])

    op.create_table(
        "ag_participant",
        sa.Column("ag_participant_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("assembly_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("assembly.assembly_id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("participant_id", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=True),
        sa.Column("escola", sa.Text(), nullable=True),
        sa.Column("regional", sa.Text(), nullable=True),
        sa.Column("cidade", sa.Text(), nullable=True),
        sa.Column("uf", sa.Text(), nullable=True),
        sa.Column("ag_filiacao", sa.Text(), nullable=True),
        # clock_timestamp keeps rows of one bulk import in insertion order.
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("clock_timestamp()")),
    )
    op.create_index("ix_ag_participant_assembly_type", "ag_participant", ["assembly_id", "type"])
    op.create_index("ix_ag_participant_type", "ag_participant", ["type"])

    op.create_table(
        "ag_registration",
        sa.Column("registration_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("assembly_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("assembly.assembly_id", ondelete="CASCADE"), nullable=False),
        sa.Column("participant_id", sa.Text(), nullable=False),
        sa.Column("participant_type", sa.Text(), nullable=True),
        sa.Column("participant_role", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column(
            "modality_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("registration_modality.modality_id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("clock_timestamp()")),
    )
    op.create_index("ix_ag_registration_assembly", "ag_registration", ["assembly_id"])
    op.create_index("ix_ag_registration_modality", "ag_registration", ["modality_id"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_ag_registration_modality", table_name="ag_registration")
    op.drop_index("ix_ag_registration_assembly", table_name="ag_registration")
    op.drop_table("ag_registration")

    op.drop_index("ix_ag_participant_type", table_name="ag_participant")
    op.drop_index("ix_ag_participant_assembly_type", table_name="ag_participant")
    op.drop_table("ag_participant")

    op.drop_index("ix_registration_modality_assembly", table_name="registration_modality")
    op.drop_table("registration_modality")

    op.drop_index("ix_assembly_status_start_date", table_name="assembly")
    op.drop_table("assembly")
