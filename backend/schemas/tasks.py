from datetime import datetime
from typing import Literal, Optional, get_args

from schemas.common import CamelModel
from schemas.projects import Priority

TaskStatus = Literal["pending", "in_progress", "completed"]

TASK_STATUSES = get_args(TaskStatus)


class TaskInput(CamelModel):
    title: str
    project_id: str
    description: Optional[str] = ""
    status: Optional[TaskStatus] = "pending"
    priority: Optional[Priority] = "medium"
    due_date: datetime
