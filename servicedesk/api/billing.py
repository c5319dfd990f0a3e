import re

from servicedesk.api.client import ApiClient
from servicedesk.core.config import settings
from servicedesk.schemas.billing import Invoice, InvoiceList, InvoiceListQuery, InvoicePdf

_FILENAME = re.compile(r'filename="?(.+?)"?$', re.IGNORECASE)


def extract_filename(disposition: str | None, invoice_id: str | None = None) -> str:
    default = f"invoice-{invoice_id}.pdf" if invoice_id else "invoice.pdf"
    if not disposition:
        return default
    m = _FILENAME.search(disposition)
    return m.group(1) if m else default


def list_invoices(client: ApiClient, query: InvoiceListQuery | None = None) -> InvoiceList:
    params = (query or InvoiceListQuery()).model_dump(mode="json", by_alias=True, exclude_none=True)
    data = client.get("/invoices", params=params, base_url=settings.billing_base_url)
    return InvoiceList.model_validate(data or {})


def get_invoice(client: ApiClient, invoice_id: str) -> Invoice:
    return Invoice.model_validate(client.get(f"/invoices/{invoice_id}", base_url=settings.billing_base_url))


def mark_invoice_paid(client: ApiClient, invoice_id: str) -> Invoice:
    data = client.post(f"/invoices/{invoice_id}/mark-paid", base_url=settings.billing_base_url)
    return Invoice.model_validate(data)


def download_invoice_pdf(client: ApiClient, invoice_id: str) -> InvoicePdf:
    resp = client.get(
        f"/invoices/{invoice_id}/pdf",
        headers={"Accept": "application/pdf"},
        base_url=settings.billing_base_url,
        raw=True,
    )
    return InvoicePdf(
        filename=extract_filename(resp.headers.get("Content-Disposition"), invoice_id),
        content=resp.content,
    )
