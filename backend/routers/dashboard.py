from fastapi import APIRouter, HTTPException
from schemas.dashboard import DashboardMetrics, DashboardAction
from schemas.common import SuccessResponse
from services.db_ops import dashboard_metrics, update_project_progress, start_task, to_object_id

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardMetrics)
async def get_dashboard():
    try:
        return dashboard_metrics()
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching dashboard metrics: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard data")


@router.post("/dashboard", response_model=SuccessResponse, response_model_exclude_none=True)
async def dashboard_action(input: DashboardAction):
    """Quick actions from the dashboard: bump project progress or start a task"""
    data = input.data or {}
    try:
        if input.action == "updateProjectProgress":
            progress = data.get("progress")
            if isinstance(progress, bool) or not isinstance(progress, (int, float)) or not 0 <= progress <= 100:
                raise HTTPException(status_code=400, detail="Invalid progress value")
            if not update_project_progress(to_object_id(data.get("id"), "project"), progress):
                raise HTTPException(status_code=404, detail="Project not found")
        elif input.action == "startTask":
            if not start_task(to_object_id(data.get("id"), "task")):
                raise HTTPException(status_code=404, detail="Task not found")
        else:
            raise HTTPException(status_code=400, detail="Invalid action")
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error running dashboard action {input.action}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update dashboard")

    return SuccessResponse(success=True)
