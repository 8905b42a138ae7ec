"""
Dashboard summary: counts and sums over a user's invoices.

Sums use the stored total_amount/vat_amount, which always equal the
recomputation (see core.totals).
"""

from datetime import datetime
from decimal import Decimal

from auth.types import User
from core.lifecycle import is_overdue
from core.models import DashboardSummary, Invoice, InvoiceStatus, StatusChartPoint
from core.services.invoice_service import InvoiceService
from utils.timezone import now_utc


def summarize_invoices(invoices: list[Invoice], now: datetime | None = None) -> DashboardSummary:
    """
    Summarize invoices for the dashboard cards and status chart.

    Args:
        invoices: All invoices of one owner
        now: Reference time for the overdue count (defaults to now)
    """
    now = now or now_utc()

    paid = [inv for inv in invoices if inv.status == InvoiceStatus.PAID]
    unpaid = [inv for inv in invoices if inv.status == InvoiceStatus.UNPAID]
    pending = [inv for inv in invoices if inv.status == InvoiceStatus.PENDING]

    return DashboardSummary(
        total_invoices=len(invoices),
        paid_count=len(paid),
        unpaid_count=len(unpaid),
        pending_count=len(pending),
        overdue_count=sum(1 for inv in unpaid if is_overdue(inv, now)),
        total_paid=sum((inv.total_amount for inv in paid), Decimal(0)),
        total_pending=sum((inv.total_amount for inv in unpaid), Decimal(0)),
        total_vat=sum((inv.vat_amount for inv in paid), Decimal(0)),
        status_chart=[
            StatusChartPoint(name="Paid", value=len(paid)),
            StatusChartPoint(name="Unpaid", value=len(unpaid)),
        ],
    )


class DashboardService:
    """Service for dashboard figures."""

    def __init__(self, invoice_service: InvoiceService):
        self.invoice_service = invoice_service

    def get_summary(self, owner: User) -> DashboardSummary:
        """Summary over every invoice the owner has."""
        invoices = self.invoice_service.list_all_for_owner(owner)
        return summarize_invoices(invoices)
