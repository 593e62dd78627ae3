from fastapi import APIRouter, HTTPException
from schemas.clients import ClientInput, CLIENT_STATUSES
from schemas.common import StatusUpdate, SuccessResponse
from services.db_ops import (list_clients, add_client, set_client_status, get_client,
                             delete_client, to_object_id)

router = APIRouter(prefix="/api", tags=["clients"])


@router.get("/clients")
async def get_clients():
    try:
        return list_clients()
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching clients: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch clients")


@router.post("/clients")
async def create_client(input: ClientInput):
    try:
        return add_client(input.name, input.email)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error creating client: {e}")
        raise HTTPException(status_code=500, detail="Failed to create client")


@router.patch("/clients/{client_id}")
async def update_client_status(client_id: str, input: StatusUpdate):
    """Activate or deactivate a client"""
    if not input.status or input.status not in CLIENT_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status value")

    oid = to_object_id(client_id, "client")
    try:
        matched, modified = set_client_status(oid, input.status)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error updating client: {e}")
        raise HTTPException(status_code=500, detail="Failed to update client")

    if not matched:
        raise HTTPException(status_code=404, detail="Client not found")
    if not modified:
        raise HTTPException(status_code=400, detail="No changes made")
    return get_client(oid)


@router.delete("/clients/{client_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def remove_client(client_id: str):
    oid = to_object_id(client_id, "client")
    try:
        deleted = delete_client(oid)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error deleting client: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete client")

    if not deleted:
        raise HTTPException(status_code=404, detail="Client not found")
    return SuccessResponse(success=True)
