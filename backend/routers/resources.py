from fastapi import APIRouter, HTTPException
from schemas.resources import ResourceInput
from schemas.common import SuccessResponse
from services.db_ops import list_resources, add_resource, utcnow

router = APIRouter(prefix="/api", tags=["resources"])


@router.get("/resources")
async def get_resources():
    try:
        return list_resources()
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching resources: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch resources")


@router.post("/resources", response_model=SuccessResponse)
async def create_resource(input: ResourceInput):
    resource = input.model_dump(exclude_none=True)
    resource.setdefault("createdAt", utcnow())
    try:
        resource_id = add_resource(resource)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error creating resource: {e}")
        raise HTTPException(status_code=500, detail="Failed to create resource")
    return SuccessResponse(success=True, id=resource_id)
