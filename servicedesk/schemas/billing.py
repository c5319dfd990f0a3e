import datetime as dt
from dataclasses import dataclass
from enum import Enum

from servicedesk.schemas._base import WireModel


class InvoiceStatus(str, Enum):
    draft = "DRAFT"
    open = "OPEN"
    paid = "PAID"
    void = "VOID"


class Invoice(WireModel):
    id: str
    project_id: str
    quote_id: str | None = None
    project_name: str | None = None
    project_description: str | None = None
    customer_email: str
    customer_user_id: int
    amount_total: float
    currency: str
    payment_method: str | None = None
    status: InvoiceStatus
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class InvoiceListQuery(WireModel):
    limit: int = 20
    offset: int = 0
    status: InvoiceStatus | None = None
    project_id: str | None = None
    search: str | None = None


class InvoiceList(WireModel):
    items: list[Invoice] = []
    total: int = 0
    limit: int = 20
    offset: int = 0


@dataclass
class InvoicePdf:
    filename: str
    content: bytes
