from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from schemas.projects import ProjectInput
from services.db_ops import list_projects, add_project, to_object_id, to_utc_naive, utcnow

router = APIRouter(prefix="/api", tags=["projects"])


@router.get("/projects")
async def get_projects(client_id: Optional[str] = Query(default=None, alias="clientId")):
    """Projects of one client, or every project newest first"""
    oid = to_object_id(client_id, "client") if client_id else None
    try:
        return list_projects(oid)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching projects: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch projects")


@router.post("/projects")
async def create_project(input: ProjectInput):
    client_oid = to_object_id(input.client_id, "client")
    now = utcnow()
    project = {
        "name": input.name,
        "clientId": client_oid,
        "status": input.status or "active",
        "progress": input.progress or 0,
        "description": input.description or "",
        "dueDate": to_utc_naive(input.due_date),
        "startDate": to_utc_naive(input.start_date) or now,
        "createdAt": now,
        "priority": input.priority or "medium",
        "tags": input.tags or [],
    }
    try:
        return add_project(project)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error creating project: {e}")
        raise HTTPException(status_code=500, detail={"error": "Failed to create project", "details": str(e)})
