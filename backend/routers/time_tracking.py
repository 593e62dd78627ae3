from fastapi import APIRouter, HTTPException, Query
from schemas.time_entries import TimeEntryInput, WeeklySummary
from schemas.common import SuccessResponse
from services.db_ops import (add_time_entry, weekly_time_summary, recent_time_entries,
                             to_object_id, to_utc_naive, utcnow)

router = APIRouter(prefix="/api", tags=["time-tracking"])


@router.post("/time-tracking", response_model=SuccessResponse)
async def log_time(input: TimeEntryInput):
    entry = {
        "projectId": to_object_id(input.project_id, "project") if input.project_id else None,
        "task": input.task,
        "duration": input.duration,
        "startTime": input.start_time,
        "endTime": input.end_time,
        "status": input.status or "completed",
        "date": to_utc_naive(input.date) or utcnow(),
    }
    try:
        entry_id = add_time_entry(entry)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error saving time entry: {e}")
        raise HTTPException(status_code=500, detail="Failed to save time entry")
    return SuccessResponse(success=True, id=entry_id)


@router.get("/time-tracking/weekly", response_model=list[WeeklySummary])
async def get_weekly_summary():
    """Hours per weekday for the last seven days"""
    try:
        return weekly_time_summary()
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching weekly summary: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch weekly summary")


@router.get("/time-tracking/recent")
async def get_recent_entries(limit: int = Query(default=10, ge=1, le=100)):
    try:
        return recent_time_entries(limit)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching time entries: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch time entries")
