"""create transporters, recyclers and waste_collections tables

Revision ID: 0001_collection_tables
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_collection_tables"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the transporter, recycler and collection tables."""
    op.create_table(
        "transporters",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Transporter ID (UUID)"),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("vehicle_number", sa.String(length=32), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transporters_email", "transporters", ["email"], unique=True)

    op.create_table(
        "recyclers",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Recycler ID (UUID)"),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, comment="Login email address"),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Hashed password (argon2)",
        ),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("state", sa.String(length=100), nullable=False),
        sa.Column("zip_code", sa.String(length=20), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_recyclers_email", "recyclers", ["email"], unique=True)

    op.create_table(
        "waste_collections",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Collection ID (UUID)"),
        sa.Column(
            "transporter_id",
            sa.String(length=36),
            nullable=False,
            comment="Transporter who performed the pickup",
        ),
        sa.Column(
            "recycler_id",
            sa.String(length=36),
            nullable=True,
            comment="Recycler that claimed the collection (set once)",
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            comment="Pending, Collected, Claimed or Processed",
        ),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("wet_weight", sa.Float(), nullable=True),
        sa.Column("dry_weight", sa.Float(), nullable=True),
        sa.Column("hazardous_weight", sa.Float(), nullable=True),
        sa.Column(
            "claim_batch_id",
            sa.String(length=36),
            nullable=True,
            comment="Claim operation that took the collection",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("claimed_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("weight IS NULL OR weight >= 0", name="ck_waste_collections_weight"),
        sa.CheckConstraint(
            "wet_weight IS NULL OR wet_weight >= 0", name="ck_waste_collections_wet_weight"
        ),
        sa.CheckConstraint(
            "dry_weight IS NULL OR dry_weight >= 0", name="ck_waste_collections_dry_weight"
        ),
        sa.CheckConstraint(
            "hazardous_weight IS NULL OR hazardous_weight >= 0",
            name="ck_waste_collections_hazardous_weight",
        ),
        sa.ForeignKeyConstraint(["transporter_id"], ["transporters.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["recycler_id"], ["recyclers.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_waste_collections_transporter_id", "waste_collections", ["transporter_id"]
    )
    op.create_index("ix_waste_collections_recycler_id", "waste_collections", ["recycler_id"])
    op.create_index(
        "ix_waste_collections_claim_batch_id", "waste_collections", ["claim_batch_id"]
    )
    op.create_index(
        "ix_waste_collections_eligibility",
        "waste_collections",
        ["transporter_id", "status", "recycler_id"],
    )


def downgrade() -> None:
    """Drop the collection tables."""
    op.drop_index("ix_waste_collections_eligibility", table_name="waste_collections")
    op.drop_index("ix_waste_collections_claim_batch_id", table_name="waste_collections")
    op.drop_index("ix_waste_collections_recycler_id", table_name="waste_collections")
    op.drop_index("ix_waste_collections_transporter_id", table_name="waste_collections")
    op.drop_table("waste_collections")
    op.drop_index("ix_recyclers_email", table_name="recyclers")
    op.drop_table("recyclers")
    op.drop_index("ix_transporters_email", table_name="transporters")
    op.drop_table("transporters")
