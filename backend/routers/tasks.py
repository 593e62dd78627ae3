from fastapi import APIRouter, HTTPException
from schemas.tasks import TaskInput, TASK_STATUSES
from schemas.common import StatusUpdate, SuccessResponse
from services.db_ops import list_tasks, add_task, set_task_status, to_object_id, to_utc_naive, utcnow

router = APIRouter(prefix="/api", tags=["tasks"])


@router.get("/tasks")
async def get_tasks():
    try:
        return list_tasks()
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching tasks: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch tasks")


@router.post("/tasks")
async def create_task(input: TaskInput):
    task = {
        "title": input.title,
        "projectId": to_object_id(input.project_id, "project"),
        "description": input.description or "",
        "status": input.status or "pending",
        "priority": input.priority or "medium",
        "dueDate": to_utc_naive(input.due_date),
        "createdAt": utcnow(),
    }
    try:
        return add_task(task)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error creating task: {e}")
        raise HTTPException(status_code=500, detail="Failed to create task")


@router.patch("/tasks/{task_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def update_task_status(task_id: str, input: StatusUpdate):
    if not input.status or input.status not in TASK_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status value")

    oid = to_object_id(task_id, "task")
    try:
        matched = set_task_status(oid, input.status)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error updating task: {e}")
        raise HTTPException(status_code=500, detail="Failed to update task")

    if not matched:
        raise HTTPException(status_code=404, detail="Task not found")
    return SuccessResponse(success=True)
