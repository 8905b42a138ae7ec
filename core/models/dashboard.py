"""Dashboard summary model."""

from decimal import Decimal

from pydantic import BaseModel, Field


class StatusChartPoint(BaseModel):
    """One bar of the invoice status chart."""

    name: str
    value: int


class DashboardSummary(BaseModel):
    """Headline figures for a user's invoices."""

    total_invoices: int = 0
    paid_count: int = 0
    unpaid_count: int = 0
    pending_count: int = 0
    overdue_count: int = 0
    total_paid: Decimal = Decimal(0)  # Sum of total_amount over paid invoices
    total_pending: Decimal = Decimal(0)  # Sum of total_amount over unpaid invoices
    total_vat: Decimal = Decimal(0)  # VAT collected on paid invoices
    status_chart: list[StatusChartPoint] = Field(default_factory=list)
