"""Add automated inventory check tables

Revision ID: 002
Revises: 001
Create Date: 2025-11-17

- inventory_checks: one row per check run
- ingredient_shortages: shortages found by each check, with resolution tracking
- ingredient_mappings: recipe ingredient name -> inventory item name aliases
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "inventory_checks",
        sa.Column("check_id", sa.Text, primary_key=True),
        sa.Column("schedule_id", sa.Text, nullable=False),
        sa.Column("check_date", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("production_dates", postgresql.JSONB, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="COMPLETED"),
        sa.Column("total_ingredients_required", sa.Integer, server_default="0"),
        sa.Column("missing_ingredients_count", sa.Integer, server_default="0"),
        sa.Column("partial_ingredients_count", sa.Integer, server_default="0"),
        sa.Column("sufficient_ingredients_count", sa.Integer, server_default="0"),
        sa.Column("overall_status", sa.String(20), nullable=False),
        sa.Column("checked_by", sa.Text),
        sa.Column("check_type", sa.String(20), server_default="MANUAL"),
        sa.Column("inventory_date", sa.String(10)),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('COMPLETED', 'FAILED', 'IN_PROGRESS')", name="check_status"),
        sa.CheckConstraint(
            "overall_status IN ('ALL_GOOD', 'PARTIAL_SHORTAGE', 'CRITICAL_SHORTAGE')",
            name="check_overall_status",
        ),
    )
    op.create_index("idx_inventory_checks_schedule", "inventory_checks", ["schedule_id"])
    op.create_index("idx_inventory_checks_date", "inventory_checks", ["check_date"])

    # Quantities are NUMERIC(15, 3): base-unit totals for a week exceed NUMERIC(10, 2)
    op.create_table(
        "ingredient_shortages",
        sa.Column("shortage_id", sa.Text, primary_key=True),
        sa.Column(
            "check_id",
            sa.Text,
            sa.ForeignKey("inventory_checks.check_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("schedule_id", sa.Text, nullable=False),
        sa.Column("production_date", sa.String(10), nullable=False),
        sa.Column("ingredient_name", sa.Text, nullable=False),
        sa.Column("inventory_item_name", sa.Text),
        sa.Column("required_quantity", sa.Numeric(15, 3), nullable=False),
        sa.Column("available_quantity", sa.Numeric(15, 3), nullable=False, server_default="0"),
        sa.Column("shortfall_amount", sa.Numeric(15, 3), nullable=False),
        sa.Column("unit", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("priority", sa.String(10), nullable=False),
        sa.Column("affected_recipes", postgresql.JSONB, server_default=sa.text("'[]'::jsonb")),
        sa.Column("affected_production_items", postgresql.JSONB, server_default=sa.text("'[]'::jsonb")),
        sa.Column("resolution_status", sa.String(20), server_default="PENDING"),
        sa.Column("resolved_by", sa.Text),
        sa.Column("resolved_at", sa.TIMESTAMP),
        sa.Column("resolution_action", sa.String(20)),
        sa.Column("resolution_notes", sa.Text),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.CheckConstraint(
            "status IN ('MISSING', 'PARTIAL', 'CRITICAL', 'SUFFICIENT')", name="shortage_status"
        ),
        sa.CheckConstraint("priority IN ('HIGH', 'MEDIUM', 'LOW')", name="shortage_priority"),
        sa.CheckConstraint(
            "resolution_status IN ('PENDING', 'ACKNOWLEDGED', 'ORDERED', 'RESOLVED', 'CANNOT_FULFILL')",
            name="shortage_resolution_status",
        ),
        sa.CheckConstraint(
            "resolution_action IS NULL OR resolution_action IN "
            "('ORDERED', 'IN_STOCK_ERROR', 'SUBSTITUTED', 'RESCHEDULED', 'CANCELLED')",
            name="shortage_resolution_action",
        ),
    )
    op.create_index("idx_shortages_check", "ingredient_shortages", ["check_id"])
    op.create_index("idx_shortages_resolution_status", "ingredient_shortages", ["resolution_status"])
    op.create_index("idx_shortages_priority", "ingredient_shortages", ["priority"])
    op.create_index("idx_shortages_production_date", "ingredient_shortages", ["production_date"])

    op.create_table(
        "ingredient_mappings",
        sa.Column("mapping_id", sa.Text, primary_key=True),
        sa.Column("recipe_ingredient_name", sa.Text, nullable=False, unique=True),
        sa.Column("inventory_item_name", sa.Text, nullable=False),
        sa.Column("category", sa.Text),
        sa.Column("notes", sa.Text),
        sa.Column("created_by", sa.Text),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )
    op.create_index("idx_mappings_recipe_name", "ingredient_mappings", ["recipe_ingredient_name"])


def downgrade() -> None:
    op.drop_table("ingredient_mappings")
    op.drop_table("ingredient_shortages")
    op.drop_table("inventory_checks")
