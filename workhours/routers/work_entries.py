"""Work entry endpoints - logging worked sessions."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from workhours.database import get_database
from workhours.models.work_entry import WorkEntry, WorkEntryCreate, WorkEntryUpdate
from workhours.routers.auth import get_current_user_id
from workhours.services.work_entry_service import WorkEntryService


router = APIRouter(prefix="/work-entries", tags=["work-entries"])


@router.get("", response_model=list[WorkEntry])
async def list_entries(
    from_: Optional[date] = Query(None, alias="from"),
    to: Optional[date] = Query(None),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List work entries for the authenticated user.

    - Optional inclusive start date range: from, to
    - Sorted by start date and time, most recent first
    """
    service = WorkEntryService(db)
    return await service.list_entries(user_id=user_id, from_=from_, to=to)


@router.post("", response_model=WorkEntry, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_create: WorkEntryCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create a work entry.

    - Referenced client/activity must exist
    - Duration is computed, breaks subtracted
    """
    service = WorkEntryService(db)
    try:
        return await service.create_entry(user_id=user_id, entry_create=entry_create)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{entry_id}", response_model=WorkEntry)
async def get_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Get a specific work entry by ID."""
    service = WorkEntryService(db)
    try:
        return await service.get_entry(user_id=user_id, entry_id=entry_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{entry_id}", response_model=WorkEntry)
async def update_entry(
    entry_id: str,
    entry_update: WorkEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update a work entry.

    - Only fields present in the body change
    """
    service = WorkEntryService(db)
    try:
        return await service.update_entry(
            user_id=user_id,
            entry_id=entry_id,
            entry_update=entry_update,
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Delete a work entry permanently."""
    service = WorkEntryService(db)
    try:
        return await service.delete_entry(user_id=user_id, entry_id=entry_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
