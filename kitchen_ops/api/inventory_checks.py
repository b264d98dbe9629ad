"""Inventory check endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from kitchen_ops.database import get_db
from kitchen_ops.schemas.inventory_check import (
    CheckResultEnvelope,
    CheckResultResponse,
    DeleteChecksResponse,
    DeletedCounts,
    RunCheckRequest,
)
from kitchen_ops.services.errors import ScheduleNotFoundError
from kitchen_ops.services.inventory_checker import (
    clear_all_checks,
    delete_checks_for_schedule,
    get_latest_check,
    run_inventory_check,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory-check", tags=["inventory-check"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/run", response_model=CheckResultEnvelope)
def run_check(
    request: RunCheckRequest,
    db: Session = Depends(get_db),
):
    """Run an inventory check for a production schedule.

    Every run is stored as a new check; pass ``userId`` for a manual check.
    """
    try:
        result = run_inventory_check(db, request.schedule_id, request.user_id)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error running inventory check for {request.schedule_id}: {e}")
        raise HTTPException(status_code=500, detail="Inventory check could not be run, please retry")

    return CheckResultEnvelope(result=CheckResultResponse.model_validate(result))


@router.get("/{schedule_id}", response_model=CheckResultEnvelope)
def get_check(
    schedule_id: str,
    db: Session = Depends(get_db),
):
    """Get the latest inventory check for a schedule."""
    result = get_latest_check(db, schedule_id)
    if not result:
        raise HTTPException(status_code=404, detail="No check found for this schedule")
    return CheckResultEnvelope(result=CheckResultResponse.model_validate(result))


@router.delete("/{schedule_id}", response_model=DeleteChecksResponse)
def delete_checks(
    schedule_id: str,
    db: Session = Depends(get_db),
):
    """Delete all checks and shortages for a schedule."""
    deleted = delete_checks_for_schedule(db, schedule_id)
    return DeleteChecksResponse(
        message=f"Deleted inventory check for schedule {schedule_id}",
        deleted=DeletedCounts(**deleted),
    )


@admin_router.delete("/inventory-checks", response_model=DeleteChecksResponse)
def clear_checks(db: Session = Depends(get_db)):
    """Delete every inventory check record."""
    deleted = clear_all_checks(db)
    if not deleted["checks"] and not deleted["shortages"]:
        message = "No records to delete - tables are already empty"
    else:
        message = "All inventory check records have been deleted"
    return DeleteChecksResponse(message=message, deleted=DeletedCounts(**deleted))
