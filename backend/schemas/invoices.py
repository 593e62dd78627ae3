from datetime import datetime
from typing import Literal

from pydantic import Field

from schemas.common import CamelModel

InvoiceStatus = Literal["draft", "sent", "paid"]


class InvoiceInput(CamelModel):
    client_id: str
    project_id: str
    amount: float = Field(ge=0)
    due_date: datetime


class InvoiceStatusUpdate(CamelModel):
    invoice_id: str
    status: InvoiceStatus
