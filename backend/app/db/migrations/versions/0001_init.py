"""init

Revision ID: 0001_init
Revises: 
Create Date: 2026-01-12

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("login", sa.String(length=64), nullable=False),
        sa.Column("full_name", sa.String(length=256), nullable=True),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_user_login", "user", ["login"], unique=True)

    op.create_table(
        "project",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("location", sa.String(length=256), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="active"),
        sa.Column("total_piles", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_racking_tables", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_modules", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("planned_start_date", sa.Date(), nullable=False),
        sa.Column("planned_end_date", sa.Date(), nullable=False),
        sa.Column("actual_start_date", sa.Date(), nullable=True),
        sa.Column("actual_end_date", sa.Date(), nullable=True),
        sa.Column("planned_piles_per_day", sa.Float(), nullable=False, server_default="0"),
        sa.Column("planned_racking_per_day", sa.Float(), nullable=False, server_default="0"),
        sa.Column("planned_modules_per_day", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_project_code", "project", ["code"], unique=True)

    op.create_table(
        "production_entry",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="SET NULL"), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("piles", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("racking_tables", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("modules", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("crew", sa.String(length=128), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("local_id", sa.String(length=64), nullable=True),
        sa.Column("device_id", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.UniqueConstraint("device_id", "local_id", name="uq_production_entry_device_local"),
    )
    op.create_index("ix_production_entry_project_id", "production_entry", ["project_id"])
    op.create_index("ix_production_entry_date", "production_entry", ["date"])


def downgrade():
    op.drop_table("production_entry")
    op.drop_table("project")
    op.drop_table("user")
