"""Core domain models."""

from core.models.line_item import InvoiceItem
from core.models.invoice import Invoice, InvoiceCreate, InvoiceUpdate, InvoiceStatus
from core.models.dashboard import DashboardSummary, StatusChartPoint

__all__ = [
    # Invoice
    "Invoice", "InvoiceCreate", "InvoiceUpdate", "InvoiceStatus",
    # Line items
    "InvoiceItem",
    # Dashboard
    "DashboardSummary", "StatusChartPoint",
]
