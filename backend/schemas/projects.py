from datetime import datetime
from typing import Literal, Optional, get_args

from pydantic import Field

from schemas.common import CamelModel

ProjectStatus = Literal["active", "completed", "paused"]
Priority = Literal["low", "medium", "high"]

PRIORITIES = get_args(Priority)


class ProjectInput(CamelModel):
    name: str
    client_id: str
    status: Optional[ProjectStatus] = "active"
    progress: Optional[int] = Field(default=0, ge=0, le=100)
    description: Optional[str] = ""
    due_date: Optional[datetime] = None
    start_date: Optional[datetime] = None
    priority: Optional[Priority] = "medium"
    tags: Optional[list[str]] = []
