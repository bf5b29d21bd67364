"""Initial schema: data centers, racks, customers, projects, assets, IP pools, change logs.

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # ── data_centers ─────────────────────────────────────────────────────────
    op.create_table(
        "data_centers",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("power_capacity_kw", sa.Numeric(10, 2), nullable=True),
        sa.Column("cooling_capacity_tons", sa.Numeric(10, 2), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_data_centers_name", "data_centers", ["name"])

    # ── racks ────────────────────────────────────────────────────────────────
    op.create_table(
        "racks",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "data_center_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("data_centers.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("row_position", sa.String(20), nullable=False),
        sa.Column("column_position", sa.String(20), nullable=False),
        sa.Column("height_units", sa.Integer(), nullable=False, server_default="42"),
        sa.Column("power_capacity_watts", sa.Integer(), nullable=True),
        sa.Column("weight_capacity_kg", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint(
            "data_center_id", "row_position", "column_position", name="uq_rack_grid_position"
        ),
    )
    op.create_index("ix_racks_name", "racks", ["name"])
    op.create_index("ix_racks_data_center_id", "racks", ["data_center_id"])

    # ── customers / projects ─────────────────────────────────────────────────
    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_customers_name", "customers", ["name"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "customer_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("customers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="planning"),
        *_timestamps(),
    )
    op.create_index("ix_projects_name", "projects", ["name"])
    op.create_index("ix_projects_customer_id", "projects", ["customer_id"])

    # ── assets ───────────────────────────────────────────────────────────────
    op.create_table(
        "assets",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("asset_tag", sa.String(100), nullable=True, unique=True),
        sa.Column("serial_number", sa.String(255), nullable=True),
        sa.Column("manufacturer", sa.String(255), nullable=True),
        sa.Column("model", sa.String(255), nullable=True),
        sa.Column("height_units", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("power_consumption_watts", sa.Integer(), nullable=True),
        sa.Column("weight_kg", sa.Numeric(10, 2), nullable=True),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("warranty_expiry", sa.Date(), nullable=True),
        sa.Column("purchase_cost", sa.Numeric(12, 2), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column(
            "customer_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("customers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "project_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("projects.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "rack_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("racks.id", ondelete="RESTRICT"),
            nullable=True,
        ),
        sa.Column("rack_position", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "(rack_id IS NULL) = (rack_position IS NULL)", name="ck_assets_rack_placement"
        ),
        sa.CheckConstraint("height_units >= 1", name="ck_assets_height_positive"),
    )
    op.create_index("ix_assets_name", "assets", ["name"])
    op.create_index("ix_assets_status", "assets", ["status"])
    op.create_index("ix_assets_rack_id", "assets", ["rack_id"])

    # ── ip_pools / ip_addresses ──────────────────────────────────────────────
    op.create_table(
        "ip_pools",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("network_address", sa.String(15), nullable=False),
        sa.Column("prefix_length", sa.Integer(), nullable=False),
        sa.Column("gateway", sa.String(15), nullable=True),
        sa.Column("vlan_id", sa.Integer(), nullable=True),
        sa.Column("dns_servers", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "prefix_length BETWEEN 8 AND 30", name="ck_ip_pools_prefix_length"
        ),
    )
    op.create_index("ix_ip_pools_name", "ip_pools", ["name"])

    op.create_table(
        "ip_addresses",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column(
            "pool_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("ip_pools.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ip_address", sa.String(15), nullable=False),
        sa.Column("ip_int", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
        sa.Column("hostname", sa.String(255), nullable=True),
        sa.Column(
            "asset_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("assets.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("assignment_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("pool_id", "ip_address", name="uq_ip_addresses_pool_ip"),
    )
    op.create_index("ix_ip_addresses_pool_id", "ip_addresses", ["pool_id"])
    op.create_index("ix_ip_addresses_ip_address", "ip_addresses", ["ip_address"])
    op.create_index("ix_ip_addresses_ip_int", "ip_addresses", ["ip_int"])
    op.create_index("ix_ip_addresses_status", "ip_addresses", ["status"])
    op.create_index("ix_ip_addresses_asset_id", "ip_addresses", ["asset_id"])

    # ── change_logs (append-only) ────────────────────────────────────────────
    op.create_table(
        "change_logs",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("table_name", sa.String(100), nullable=False),
        sa.Column("record_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("changes", sa.JSON(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_change_logs_table_name", "change_logs", ["table_name"])
    op.create_index("ix_change_logs_record_id", "change_logs", ["record_id"])
    op.create_index("ix_change_logs_created_at", "change_logs", ["created_at"])


def downgrade() -> None:
    op.drop_table("change_logs")
    op.drop_table("ip_addresses")
    op.drop_table("ip_pools")
    op.drop_table("assets")
    op.drop_table("projects")
    op.drop_table("customers")
    op.drop_table("racks")
    op.drop_table("data_centers")
