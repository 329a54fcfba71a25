"""
Initial schema - all 11 tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

DOCUMENT_TABLES = (
    "shipments",
    "dispatch_outputs",
    "delivery_forwards",
    "customers",
    "summary",
    "item_snapshots",
    "item_activity_logs",
)


def upgrade() -> None:
    # 1. Users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="driver"),
        sa.Column("full_name", sa.String(255)),
        sa.CheckConstraint("role IN ('admin', 'coordinator', 'driver')", name="ck_user_role"),
    )

    # 2. Drivers
    op.create_table(
        "drivers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("license_number", sa.String(50), nullable=False),
        sa.Column("vehicle_assigned", sa.String(255)),
        sa.Column("status", sa.String(50)),
    )

    # 3. Vehicles (client-supplied id)
    op.create_table(
        "vehicles",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("plate_number", sa.String(50), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="Active"),
    )
    op.create_index("ix_vehicles_status", "vehicles", ["status"])

    # 4. Routes (client-supplied route code)
    op.create_table(
        "routes",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("drop_point", sa.String(255), nullable=False),
    )

    # 5-11. Documents
    for table_name in DOCUMENT_TABLES:
        op.create_table(
            table_name,
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("name", sa.Text, nullable=False),
            sa.Column("description", sa.Text),
            sa.Column("status", sa.Text, nullable=False, server_default="incomplete"),
            sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
            sa.Column("created_by", sa.Text),
            sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
            sa.Column("updated_by", sa.Text),
            sa.Column("file_name", sa.Text),
            sa.Column("file_data", sa.LargeBinary),
        )


def downgrade() -> None:
    for table_name in reversed(DOCUMENT_TABLES):
        op.drop_table(table_name)
    op.drop_table("routes")
    op.drop_index("ix_vehicles_status", table_name="vehicles")
    op.drop_table("vehicles")
    op.drop_table("drivers")
    op.drop_table("users")
