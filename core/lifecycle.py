"""
Invoice status lifecycle.

    unpaid --mark_as_paid--> paid

paid is terminal and there is no way back to unpaid. pending can be
displayed when found on a stored invoice, but no transition produces it
and it cannot be marked paid.

Overdue is not a status. It is a display predicate computed on read from
status and due_date.
"""

from datetime import datetime

from core.models import Invoice, InvoiceStatus
from utils.timezone import now_utc, start_of_day_utc, to_utc

OVERDUE = "overdue"


class InvalidStatusTransitionError(ValueError):
    """Requested status change is not allowed from the current status."""

    def __init__(self, invoice_id: str, current: InvoiceStatus, target: InvoiceStatus):
        self.invoice_id = invoice_id
        self.current = current
        self.target = target
        super().__init__(
            f"Invoice {invoice_id} cannot move from '{current.value}' to '{target.value}'"
        )


def mark_as_paid(invoice: Invoice) -> Invoice:
    """
    Return the invoice in PAID status.

    Idempotent: an already paid invoice is returned as-is, so callers can
    compare identity to know whether anything needs writing.

    Raises:
        InvalidStatusTransitionError: If the invoice is PENDING
    """
    if invoice.is_paid:
        return invoice

    if invoice.status != InvoiceStatus.UNPAID:
        raise InvalidStatusTransitionError(invoice.id, invoice.status, InvoiceStatus.PAID)

    return invoice.model_copy(update={"status": InvoiceStatus.PAID})


def is_overdue(invoice: Invoice, now: datetime | None = None) -> bool:
    """
    Whether an invoice is overdue: UNPAID and its due date has started.

    The due date counts from 00:00 UTC, so an unpaid invoice is overdue
    for the whole of its due day.
    """
    if invoice.status != InvoiceStatus.UNPAID:
        return False

    now = to_utc(now) if now is not None else now_utc()
    return start_of_day_utc(invoice.due_date) < now


def display_status(invoice: Invoice, now: datetime | None = None) -> str:
    """Status label for display: 'overdue' when overdue, else the stored status."""
    if is_overdue(invoice, now):
        return OVERDUE
    return invoice.status.value
