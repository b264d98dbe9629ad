"""Shortage board endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from kitchen_ops.database import get_db
from kitchen_ops.schemas.inventory_check import (
    ResolveShortageRequest,
    ResolveShortageResponse,
    ShortageBoardItem,
    ShortageList,
    ShortageRecord,
)
from kitchen_ops.services.errors import ShortageNotFoundError
from kitchen_ops.services.shortages import list_shortages, resolve_shortage

router = APIRouter(prefix="/inventory-shortages", tags=["inventory-shortages"])


@router.get("", response_model=ShortageList)
def get_shortages(
    schedule_id: Optional[str] = Query(None, alias="scheduleId"),
    status: str = Query("PENDING", description="Resolution status, or ALL"),
    priority: Optional[str] = Query(None, description="HIGH, MEDIUM, or LOW"),
    db: Session = Depends(get_db),
):
    """List shortages, most urgent first. Defaults to unresolved shortages."""
    rows = list_shortages(db, schedule_id=schedule_id, status=status, priority=priority)
    shortages = [
        ShortageBoardItem(
            **ShortageRecord.model_validate(shortage).model_dump(),
            check_date=check.check_date,
            overall_status=check.overall_status,
        )
        for shortage, check in rows
    ]
    return ShortageList(shortages=shortages, count=len(shortages))


@router.patch("/{shortage_id}/resolve", response_model=ResolveShortageResponse)
def resolve(
    shortage_id: str,
    data: ResolveShortageRequest,
    db: Session = Depends(get_db),
):
    """Mark a shortage resolved (or unfulfillable) and record what was done."""
    try:
        shortage = resolve_shortage(
            db,
            shortage_id,
            resolution_status=data.resolution_status,
            resolved_by=data.resolved_by,
            resolution_action=data.resolution_action,
            resolution_notes=data.resolution_notes,
        )
    except ShortageNotFoundError:
        raise HTTPException(status_code=404, detail="Shortage not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ResolveShortageResponse(shortage=ShortageRecord.model_validate(shortage))
