"""InventoryCheck and IngredientShortage models."""
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Text, TIMESTAMP,
    ForeignKey, Numeric, CheckConstraint, Index
)
from sqlalchemy.orm import relationship

from . import Base, JSONDocument


class InventoryCheck(Base):
    """One run of the shortage checker against a production schedule.

    Rows are never updated; re-running a check inserts a new row.
    """

    __tablename__ = "inventory_checks"
    __table_args__ = (
        CheckConstraint("status IN ('COMPLETED', 'FAILED', 'IN_PROGRESS')", name="check_status"),
        CheckConstraint(
            "overall_status IN ('ALL_GOOD', 'PARTIAL_SHORTAGE', 'CRITICAL_SHORTAGE')",
            name="check_overall_status",
        ),
        Index("idx_inventory_checks_schedule", "schedule_id"),
        Index("idx_inventory_checks_date", "check_date"),
    )

    check_id = Column(Text, primary_key=True)
    schedule_id = Column(Text, nullable=False)
    check_date = Column(TIMESTAMP, default=datetime.utcnow)
    production_dates = Column(JSONDocument, nullable=False)  # ["2026-01-19", ...]
    status = Column(String(20), nullable=False, default="COMPLETED")
    total_ingredients_required = Column(Integer, default=0)
    missing_ingredients_count = Column(Integer, default=0)
    partial_ingredients_count = Column(Integer, default=0)
    sufficient_ingredients_count = Column(Integer, default=0)
    overall_status = Column(String(20), nullable=False)
    checked_by = Column(Text)
    check_type = Column(String(20), default="MANUAL")  # 'MANUAL', 'AUTOMATIC'
    inventory_date = Column(String(10))  # Snapshot date the check compared against
    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    # Relationships
    shortages = relationship(
        "IngredientShortage",
        back_populates="check",
        cascade="all, delete-orphan",
    )

    STATUS_COMPLETED = "COMPLETED"

    def __repr__(self):
        return f"<InventoryCheck(check_id='{self.check_id}', overall='{self.overall_status}')>"


class IngredientShortage(Base):
    """An ingredient that a production day needs more of than is in stock."""

    __tablename__ = "ingredient_shortages"
    __table_args__ = (
        CheckConstraint(
            "status IN ('MISSING', 'PARTIAL', 'CRITICAL', 'SUFFICIENT')", name="shortage_status"
        ),
        CheckConstraint("priority IN ('HIGH', 'MEDIUM', 'LOW')", name="shortage_priority"),
        CheckConstraint(
            "resolution_status IN ('PENDING', 'ACKNOWLEDGED', 'ORDERED', 'RESOLVED', 'CANNOT_FULFILL')",
            name="shortage_resolution_status",
        ),
        CheckConstraint(
            "resolution_action IS NULL OR resolution_action IN "
            "('ORDERED', 'IN_STOCK_ERROR', 'SUBSTITUTED', 'RESCHEDULED', 'CANCELLED')",
            name="shortage_resolution_action",
        ),
        Index("idx_shortages_check", "check_id"),
        Index("idx_shortages_resolution_status", "resolution_status"),
        Index("idx_shortages_priority", "priority"),
        Index("idx_shortages_production_date", "production_date"),
    )

    shortage_id = Column(Text, primary_key=True)
    check_id = Column(
        Text, ForeignKey("inventory_checks.check_id", ondelete="CASCADE"), nullable=False
    )
    schedule_id = Column(Text, nullable=False)
    production_date = Column(String(10), nullable=False)
    ingredient_name = Column(Text, nullable=False)
    inventory_item_name = Column(Text)  # Null when nothing in stock matched
    required_quantity = Column(Numeric(15, 3), nullable=False)
    available_quantity = Column(Numeric(15, 3), nullable=False, default=0)
    shortfall_amount = Column(Numeric(15, 3), nullable=False)
    unit = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False)
    priority = Column(String(10), nullable=False)
    affected_recipes = Column(JSONDocument, default=list)
    affected_production_items = Column(JSONDocument, default=list)
    resolution_status = Column(String(20), default="PENDING", server_default="PENDING")  # NULL on legacy rows
    resolved_by = Column(Text)
    resolved_at = Column(TIMESTAMP)
    resolution_action = Column(String(20))
    resolution_notes = Column(Text)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    check = relationship("InventoryCheck", back_populates="shortages")

    RESOLUTION_PENDING = "PENDING"

    def __repr__(self):
        return f"<IngredientShortage(ingredient='{self.ingredient_name}', status='{self.status}')>"
