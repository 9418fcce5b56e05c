"""qc inspections and pile refusals

Revision ID: 0002_qc_refusals
Revises: 0001_init
Create Date: 2026-01-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_qc_refusals"
down_revision = "0001_init"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "qc_inspection",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="SET NULL"), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("scope", sa.String(length=32), nullable=False, server_default="individual"),
        sa.Column("scope_count", sa.Integer(), nullable=True),
        sa.Column("area", sa.String(length=128), nullable=True),
        sa.Column("pile_ids", sa.Text(), nullable=True),
        sa.Column("pile_type", sa.String(length=16), nullable=False, server_default="interior"),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pass"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("local_id", sa.String(length=64), nullable=True),
        sa.Column("device_id", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.UniqueConstraint("device_id", "local_id", name="uq_qc_inspection_device_local"),
    )
    op.create_index("ix_qc_inspection_project_id", "qc_inspection", ["project_id"])
    op.create_index("ix_qc_inspection_date", "qc_inspection", ["date"])

    op.create_table(
        "qc_inspection_item",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "inspection_id", sa.Integer(), sa.ForeignKey("qc_inspection.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("pile_id", sa.String(length=64), nullable=True),
        sa.Column("measurement_type", sa.String(length=64), nullable=True),
        sa.Column("measured_value", sa.Float(), nullable=False),
        sa.Column("min_value", sa.Float(), nullable=False),
        sa.Column("max_value", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=16), nullable=False),
        sa.Column("passed", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index("ix_qc_inspection_item_inspection_id", "qc_inspection_item", ["inspection_id"])

    op.create_table(
        "qc_issue",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "inspection_id", sa.Integer(), sa.ForeignKey("qc_inspection.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="open"),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("pile_id", sa.String(length=64), nullable=True),
        sa.Column("assigned_to", sa.String(length=128), nullable=True),
        sa.Column("opened_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("corrected_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_qc_issue_project_id", "qc_issue", ["project_id"])
    op.create_index("ix_qc_issue_inspection_id", "qc_issue", ["inspection_id"])
    op.create_index("ix_qc_issue_status", "qc_issue", ["status"])

    op.create_table(
        "pile_refusal",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("reported_by", sa.Integer(), sa.ForeignKey("user.id", ondelete="SET NULL"), nullable=True),
        sa.Column("pile_id", sa.String(length=64), nullable=False),
        sa.Column("block", sa.String(length=64), nullable=True),
        sa.Column("row", sa.String(length=64), nullable=True),
        sa.Column("pile_number", sa.String(length=64), nullable=True),
        sa.Column("date_discovered", sa.Date(), nullable=False),
        sa.Column("target_depth", sa.Float(), nullable=False),
        sa.Column("achieved_depth", sa.Float(), nullable=False),
        sa.Column("refusal_reason", sa.String(length=256), nullable=False),
        sa.Column("refusal_notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="open"),
        sa.Column("remediation_method", sa.String(length=256), nullable=True),
        sa.Column("remediation_date", sa.Date(), nullable=True),
        sa.Column("engineer_approval", sa.String(length=256), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_pile_refusal_project_id", "pile_refusal", ["project_id"])
    op.create_index("ix_pile_refusal_pile_id", "pile_refusal", ["pile_id"])
    op.create_index("ix_pile_refusal_date_discovered", "pile_refusal", ["date_discovered"])


def downgrade():
    op.drop_table("pile_refusal")
    op.drop_table("qc_issue")
    op.drop_table("qc_inspection_item")
    op.drop_table("qc_inspection")
