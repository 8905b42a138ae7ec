"""Tests for core/lifecycle.py - status transitions and overdue display."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.lifecycle import (
    InvalidStatusTransitionError,
    display_status,
    is_overdue,
    mark_as_paid,
)
from core.models import Invoice, InvoiceStatus


NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_invoice(**overrides) -> Invoice:
    fields = dict(
        id="inv-1",
        user_id="user-0001",
        client_name="Ada Okafor",
        client_email="ada@example.com",
        amount=Decimal("1000"),
        vat_percentage=Decimal("7.5"),
        vat_amount=Decimal("75"),
        total_amount=Decimal("1075"),
        due_date=date(2025, 7, 1),
        status=InvoiceStatus.UNPAID,
        created_at=NOW - timedelta(days=10),
    )
    fields.update(overrides)
    return Invoice(**fields)


class TestMarkAsPaid:
    """Tests for mark_as_paid()."""

    def test_unpaid_becomes_paid(self):
        invoice = make_invoice()

        paid = mark_as_paid(invoice)

        assert paid.status == InvoiceStatus.PAID

    def test_does_not_mutate_input(self):
        invoice = make_invoice()

        mark_as_paid(invoice)

        assert invoice.status == InvoiceStatus.UNPAID

    def test_keeps_other_fields(self):
        invoice = make_invoice()

        paid = mark_as_paid(invoice)

        assert paid.total_amount == invoice.total_amount
        assert paid.id == invoice.id
        assert paid.created_at == invoice.created_at

    def test_paid_is_idempotent(self):
        """Marking a paid invoice again returns the very same invoice."""
        invoice = make_invoice(status=InvoiceStatus.PAID)

        again = mark_as_paid(invoice)

        assert again is invoice
        assert again.status == InvoiceStatus.PAID

    def test_twice_in_a_row(self):
        once = mark_as_paid(make_invoice())
        twice = mark_as_paid(once)

        assert twice is once

    def test_pending_cannot_be_marked_paid(self):
        invoice = make_invoice(status=InvoiceStatus.PENDING)

        with pytest.raises(InvalidStatusTransitionError, match="pending"):
            mark_as_paid(invoice)


class TestIsOverdue:
    """Tests for is_overdue()."""

    def test_unpaid_past_due_is_overdue(self):
        invoice = make_invoice(due_date=date(2025, 6, 1))

        assert is_overdue(invoice, NOW) is True

    def test_paid_past_due_is_not_overdue(self):
        invoice = make_invoice(due_date=date(2025, 6, 1), status=InvoiceStatus.PAID)

        assert is_overdue(invoice, NOW) is False

    def test_pending_past_due_is_not_overdue(self):
        invoice = make_invoice(due_date=date(2025, 6, 1), status=InvoiceStatus.PENDING)

        assert is_overdue(invoice, NOW) is False

    def test_future_due_is_not_overdue(self):
        invoice = make_invoice(due_date=date(2025, 6, 16))

        assert is_overdue(invoice, NOW) is False

    def test_due_today_counts_from_midnight_utc(self):
        """An unpaid invoice due today is overdue once the day has started."""
        invoice = make_invoice(due_date=date(2025, 6, 15))

        assert is_overdue(invoice, NOW) is True
        assert is_overdue(invoice, datetime(2025, 6, 15, 0, 0, tzinfo=timezone.utc)) is False

    def test_defaults_to_current_time(self):
        invoice = make_invoice(due_date=date(2000, 1, 1))

        assert is_overdue(invoice) is True

    def test_rejects_naive_now(self):
        with pytest.raises(ValueError, match="naive"):
            is_overdue(make_invoice(), datetime(2025, 6, 15, 12, 0))


class TestDisplayStatus:
    """Tests for display_status()."""

    def test_overdue_label(self):
        invoice = make_invoice(due_date=date(2025, 6, 1))

        assert display_status(invoice, NOW) == "overdue"

    def test_stored_status_otherwise(self):
        assert display_status(make_invoice(), NOW) == "unpaid"
        assert display_status(make_invoice(status=InvoiceStatus.PAID), NOW) == "paid"
        assert display_status(make_invoice(status=InvoiceStatus.PENDING), NOW) == "pending"
