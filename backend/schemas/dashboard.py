from pydantic import BaseModel
from typing import Optional


class DashboardMetrics(BaseModel):
    totalEarnings: float
    activeProjects: int
    hoursWorked: int
    activeClients: int
    currentProjects: list[dict]
    upcomingDeadlines: list[dict]


class DashboardAction(BaseModel):
    action: str
    data: Optional[dict] = None
