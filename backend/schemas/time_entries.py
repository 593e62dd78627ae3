from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from schemas.common import CamelModel


class TimeEntryInput(CamelModel):
    project_id: Optional[str] = None
    task: Optional[str] = None
    duration: int = Field(ge=0)  # seconds
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    date: Optional[datetime] = None
    status: Optional[str] = "completed"


class WeeklySummary(BaseModel):
    day: int  # MongoDB $dayOfWeek: 1 = Sunday .. 7 = Saturday
    hours: float
    projectCount: int
