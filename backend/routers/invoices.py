from fastapi import APIRouter, HTTPException
from schemas.invoices import InvoiceInput, InvoiceStatusUpdate
from schemas.common import SuccessResponse
from services.db_ops import list_invoices, add_invoice, set_invoice_status, to_object_id, to_utc_naive, utcnow

router = APIRouter(prefix="/api", tags=["invoices"])


@router.get("/invoices")
async def get_invoices():
    try:
        return list_invoices()
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching invoices: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch invoices")


@router.post("/invoices")
async def create_invoice(input: InvoiceInput):
    """New invoices always start as drafts"""
    invoice = {
        "clientId": to_object_id(input.client_id, "client"),
        "projectId": to_object_id(input.project_id, "project"),
        "amount": input.amount,
        "status": "draft",
        "dueDate": to_utc_naive(input.due_date),
        "createdAt": utcnow(),
    }
    try:
        return add_invoice(invoice)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error creating invoice: {e}")
        raise HTTPException(status_code=500, detail="Failed to create invoice")


@router.patch("/invoices", response_model=SuccessResponse, response_model_exclude_none=True)
async def update_invoice_status(input: InvoiceStatusUpdate):
    oid = to_object_id(input.invoice_id, "invoice")
    try:
        matched = set_invoice_status(oid, input.status)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error updating invoice: {e}")
        raise HTTPException(status_code=500, detail="Failed to update invoice")

    if not matched:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return SuccessResponse(success=True)
