"""GET /api/data - unified read endpoint."""

from fastapi import APIRouter, Query, Request

from api.base import success_response
from core.lifecycle import is_overdue, display_status
from core.models import Invoice, InvoiceStatus
from core.totals import compute_totals
from utils.timezone import now_utc


VALID_TYPES = {"invoices"}

# filter=all means no status filter
VALID_INVOICE_FILTERS = {"all"} | {s.value for s in InvoiceStatus}


def invoice_payload(invoice: Invoice, now=None) -> dict:
    """Invoice as JSON plus the read-time display fields."""
    now = now or now_utc()
    data = invoice.model_dump(mode="json")
    data["is_overdue"] = is_overdue(invoice, now)
    data["display_status"] = display_status(invoice, now)
    for item, item_data in zip(invoice.items, data["items"]):
        item_data["expected_amount"] = str(item.expected_amount)
    return data


def create_data_router(services: dict) -> APIRouter:
    router = APIRouter()

    invoice_svc = services["invoice"]
    dashboard_svc = services["dashboard"]

    # -------------------------------------------------------------------------
    # Convenience routes (must be registered before the generic /data route)
    # -------------------------------------------------------------------------

    @router.get("/data/invoices/preview")
    async def invoice_preview(
        request: Request,
        amount: str = Query(...),
        vat_percentage: str = Query(...),
    ):
        totals = compute_totals(amount, vat_percentage)
        return success_response({
            "amount": str(totals.amount),
            "vat_percentage": str(totals.vat_percentage),
            "vat_amount": str(totals.vat_amount),
            "total_amount": str(totals.total_amount),
        }, request.state.request_id).model_dump(mode="json")

    @router.get("/data/dashboard")
    async def dashboard(request: Request):
        summary = dashboard_svc.get_summary(request.state.user)
        return success_response(
            summary.model_dump(mode="json"), request.state.request_id
        ).model_dump(mode="json")

    # -------------------------------------------------------------------------
    # Generic data endpoint
    # -------------------------------------------------------------------------

    @router.get("/data")
    async def get_data(
        request: Request,
        type: str | None = Query(None),
        id: str | None = Query(None),
        filter: str | None = Query(None),
        limit: int = Query(50, ge=1, le=500),
        offset: int = Query(0, ge=0),
    ):
        if type is None:
            raise ValueError("'type' query parameter is required")

        if type not in VALID_TYPES:
            raise ValueError(f"Unknown type '{type}'. Valid types: {', '.join(sorted(VALID_TYPES))}")

        if type == "invoices":
            data = _handle_invoices(invoice_svc, request.state.user, id, filter, limit, offset)
            return success_response(data, request.state.request_id).model_dump(mode="json")

    return router


def _handle_invoices(invoice_svc, owner, id, filter, limit, offset):
    if id:
        invoice = invoice_svc.get_by_id(owner, id)
        if invoice is None:
            raise ValueError(f"Invoice {id} not found")
        return invoice_payload(invoice)

    filter = filter or "all"
    if filter not in VALID_INVOICE_FILTERS:
        raise ValueError(
            f"Unknown filter '{filter}'. Valid filters: {', '.join(sorted(VALID_INVOICE_FILTERS))}"
        )

    status = None if filter == "all" else InvoiceStatus(filter)
    invoices = invoice_svc.list_for_owner(owner, status=status, limit=limit, offset=offset)

    now = now_utc()
    return [invoice_payload(inv, now) for inv in invoices]
