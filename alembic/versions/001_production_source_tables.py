"""Production source tables

Revision ID: 001
Revises:
Create Date: 2025-11-03

Tables populated by the schedule planner and the ERP/spreadsheet syncs:
- production_schedules
- recipe_lines
- branch_inventory
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # === PRODUCTION SCHEDULES ===
    op.create_table(
        "production_schedules",
        sa.Column("schedule_id", sa.Text, primary_key=True),
        sa.Column("schedule_data", postgresql.JSONB, nullable=False),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )
    op.create_index(
        "idx_production_schedules_week_start",
        "production_schedules",
        [sa.text("(schedule_data->>'weekStart')")],
    )

    # === RECIPE LINES ===
    op.create_table(
        "recipe_lines",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("item", sa.String(255), nullable=False),
        sa.Column("ingredient_name", sa.String(255), nullable=False),
        sa.Column("item_type", sa.String(20), nullable=False, server_default="ingredient"),
        sa.Column("quantity", sa.Numeric(12, 4), nullable=False, server_default="0"),
        sa.Column("unit", sa.String(20)),
        sa.CheckConstraint(
            "item_type IN ('ingredient', 'subrecipe')", name="ck_recipe_lines_item_type"
        ),
    )
    op.create_index("idx_recipe_lines_item", "recipe_lines", ["item"])

    # === BRANCH INVENTORY ===
    op.create_table(
        "branch_inventory",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("inventory_date", sa.Date, nullable=False),
        sa.Column("branch", sa.String(100), nullable=False),
        sa.Column("item", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100)),
        sa.Column("quantity", sa.Numeric(12, 2)),
        sa.Column("unit", sa.String(50)),
        sa.Column("product_expiry_date", sa.Date),
        sa.Column("unit_cost", sa.Numeric(10, 2)),
        sa.Column("total_cost", sa.Numeric(10, 2)),
        sa.Column("source_file", sa.String(255)),
        sa.Column("last_synced", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.UniqueConstraint("inventory_date", "branch", "item", name="unique_branch_inventory"),
    )
    op.create_index("idx_branch_inventory_branch", "branch_inventory", ["branch"])
    op.create_index("idx_branch_inventory_date", "branch_inventory", ["inventory_date"])


def downgrade() -> None:
    op.drop_table("branch_inventory")
    op.drop_table("recipe_lines")
    op.drop_index("idx_production_schedules_week_start", table_name="production_schedules")
    op.drop_table("production_schedules")
