"""Shortage listing and resolution for the kitchen shortage board."""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from kitchen_ops.models.inventory_check import InventoryCheck, IngredientShortage
from kitchen_ops.services.errors import ShortageNotFoundError
from kitchen_ops.services.inventory_checker import PRIORITY_RANK

logger = logging.getLogger(__name__)

STATUS_FILTER_ALL = "ALL"
RESOLUTION_STATUSES = ("ACKNOWLEDGED", "ORDERED", "RESOLVED", "CANNOT_FULFILL")
RESOLUTION_ACTIONS = ("ORDERED", "IN_STOCK_ERROR", "SUBSTITUTED", "RESCHEDULED", "CANCELLED")


def list_shortages(
    db: Session,
    schedule_id: Optional[str] = None,
    status: str = IngredientShortage.RESOLUTION_PENDING,
    priority: Optional[str] = None,
) -> list[tuple[IngredientShortage, InventoryCheck]]:
    """
    List shortages with the check that found them.

    ``status`` filters on resolution status. PENDING also matches rows
    with no resolution status; ALL disables the filter.
    Ordered HIGH, MEDIUM, LOW, newest first within a priority.
    """
    query = db.query(IngredientShortage, InventoryCheck).join(
        InventoryCheck, IngredientShortage.check_id == InventoryCheck.check_id
    )

    if status == IngredientShortage.RESOLUTION_PENDING:
        query = query.filter(or_(
            IngredientShortage.resolution_status == IngredientShortage.RESOLUTION_PENDING,
            IngredientShortage.resolution_status.is_(None),
        ))
    elif status != STATUS_FILTER_ALL:
        query = query.filter(IngredientShortage.resolution_status == status)

    if schedule_id:
        query = query.filter(IngredientShortage.schedule_id == schedule_id)
    if priority:
        query = query.filter(IngredientShortage.priority == priority)

    return query.order_by(PRIORITY_RANK, IngredientShortage.created_at.desc()).all()


def resolve_shortage(
    db: Session,
    shortage_id: str,
    resolution_status: str,
    resolved_by: str,
    resolution_action: Optional[str] = None,
    resolution_notes: Optional[str] = None,
) -> IngredientShortage:
    """Record how a shortage was handled.

    Raises:
        ShortageNotFoundError: If no shortage has this ID
        ValueError: If the status or action is not recognized
    """
    if resolution_status not in RESOLUTION_STATUSES:
        raise ValueError(f"Invalid resolution status: {resolution_status}")
    if resolution_action is not None and resolution_action not in RESOLUTION_ACTIONS:
        raise ValueError(f"Invalid resolution action: {resolution_action}")

    shortage = (
        db.query(IngredientShortage)
        .filter(IngredientShortage.shortage_id == shortage_id)
        .first()
    )
    if not shortage:
        raise ShortageNotFoundError(shortage_id)

    now = datetime.utcnow()
    shortage.resolution_status = resolution_status
    shortage.resolution_action = resolution_action
    shortage.resolution_notes = resolution_notes
    shortage.resolved_by = resolved_by
    shortage.resolved_at = now
    shortage.updated_at = now

    db.commit()
    db.refresh(shortage)
    logger.info(f"Shortage {shortage_id} marked {resolution_status} by {resolved_by}")
    return shortage
