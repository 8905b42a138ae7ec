"""
Invoice service for create, edit, mark-paid and delete.

Invoices live as documents in the Appwrite collection. Every operation
takes the authenticated owner explicitly and only ever sees documents
whose user_id matches that owner.

Derived totals are recomputed with compute_totals() on every write, so
the stored vat_amount/total_amount always match amount and vat_percentage.
Money fields are stored as decimal strings so documents hold exactly
the computed values.
"""

import logging
from typing import Any

from auth.types import User
from clients.appwrite_client import (
    AppwriteClient,
    RemoteServiceError,
    UNIQUE_ID,
    query_equal,
    query_limit,
    query_offset,
    query_order_desc,
)
from core.lifecycle import mark_as_paid
from core.models import Invoice, InvoiceCreate, InvoiceStatus, InvoiceUpdate
from core.models.line_item import items_to_document
from core.totals import InvoiceTotals, compute_totals
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

# Page size when loading every invoice of an owner
_PAGE_SIZE = 100


def _totals_fields(totals: InvoiceTotals) -> dict[str, str]:
    """Monetary fields as stored on the document: exact decimal strings."""
    return {
        "amount": str(totals.amount),
        "vat_percentage": str(totals.vat_percentage),
        "vat_amount": str(totals.vat_amount),
        "total_amount": str(totals.total_amount),
    }


class InvoiceService:
    """Service for invoice operations."""

    def __init__(self, appwrite: AppwriteClient, database_id: str, collection_id: str):
        self.appwrite = appwrite
        self.database_id = database_id
        self.collection_id = collection_id

    def create(self, owner: User, data: InvoiceCreate) -> Invoice:
        """
        Create an invoice in UNPAID status.

        Args:
            owner: Authenticated user who owns the invoice
            data: Client, amount, VAT rate, due date and optional line items

        Returns:
            Created invoice

        Raises:
            InvalidInputError: If amount or VAT rate is not a non-negative number
            RemoteServiceError: If the document store rejects the write
        """
        totals = compute_totals(data.amount, data.vat_percentage)

        document: dict[str, Any] = {
            "client_name": data.client_name,
            "client_email": str(data.client_email),
            **_totals_fields(totals),
            "due_date": data.due_date.isoformat(),
            "status": InvoiceStatus.UNPAID.value,
            "user_id": owner.id,
            "created_at": now_utc().isoformat(),
        }
        if data.items:
            document["items"] = items_to_document(data.items)

        row = self.appwrite.create_document(
            self.database_id, self.collection_id, UNIQUE_ID, document
        )
        invoice = Invoice.from_document(row)

        logger.info(f"Invoice {invoice.id} created for user {owner.id} (total {invoice.total_amount})")
        return invoice

    def get_by_id(self, owner: User, invoice_id: str) -> Invoice | None:
        """
        Get invoice by ID.

        Returns:
            Invoice if found and owned by owner, None otherwise.
        """
        try:
            row = self.appwrite.get_document(self.database_id, self.collection_id, invoice_id)
        except RemoteServiceError as e:
            if e.is_not_found:
                return None
            raise

        if row.get("user_id") != owner.id:
            return None

        return Invoice.from_document(row)

    def list_for_owner(
        self,
        owner: User,
        status: InvoiceStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invoice]:
        """
        List an owner's invoices.

        Args:
            owner: Authenticated user
            status: Only invoices in this status (all when None)
            limit: Maximum results
            offset: Results to skip

        Returns:
            Invoices ordered by creation time DESC
        """
        queries = [query_equal("user_id", owner.id)]
        if status is not None:
            queries.append(query_equal("status", status.value))
        queries += [
            query_order_desc("$createdAt"),
            query_limit(limit),
            query_offset(offset),
        ]

        rows = self.appwrite.list_documents(self.database_id, self.collection_id, queries)
        return [Invoice.from_document(row) for row in rows]

    def list_all_for_owner(self, owner: User) -> list[Invoice]:
        """Every invoice of an owner, paging through the document store."""
        invoices: list[Invoice] = []
        offset = 0

        while True:
            page = self.list_for_owner(owner, limit=_PAGE_SIZE, offset=offset)
            invoices.extend(page)
            if len(page) < _PAGE_SIZE:
                return invoices
            offset += _PAGE_SIZE

    def update(self, owner: User, invoice_id: str, data: InvoiceUpdate) -> Invoice:
        """
        Update invoice fields and recompute totals.

        Status cannot be changed here; use mark_paid().

        Raises:
            ValueError: If invoice not found
            InvalidInputError: If the merged amount or VAT rate is invalid
        """
        current = self.get_by_id(owner, invoice_id)
        if current is None:
            raise ValueError(f"Invoice {invoice_id} not found")

        amount = data.amount if data.amount is not None else current.amount
        vat_percentage = (
            data.vat_percentage if data.vat_percentage is not None else current.vat_percentage
        )
        totals = compute_totals(amount, vat_percentage)

        fields: dict[str, Any] = _totals_fields(totals)
        if data.client_name is not None:
            fields["client_name"] = data.client_name
        if data.client_email is not None:
            fields["client_email"] = str(data.client_email)
        if data.due_date is not None:
            fields["due_date"] = data.due_date.isoformat()
        if data.items is not None:
            fields["items"] = items_to_document(data.items)

        row = self.appwrite.update_document(
            self.database_id, self.collection_id, invoice_id, fields
        )
        updated = Invoice.from_document(row)

        logger.info(f"Invoice {invoice_id} updated by user {owner.id}")
        return updated

    def mark_paid(self, owner: User, invoice_id: str) -> Invoice:
        """
        Mark an invoice as paid.

        Already paid invoices are returned unchanged without a write.

        Raises:
            ValueError: If invoice not found
            InvalidStatusTransitionError: If the invoice is PENDING
        """
        current = self.get_by_id(owner, invoice_id)
        if current is None:
            raise ValueError(f"Invoice {invoice_id} not found")

        paid = mark_as_paid(current)
        if paid is current:
            return current

        row = self.appwrite.update_document(
            self.database_id,
            self.collection_id,
            invoice_id,
            {"status": paid.status.value},
        )
        updated = Invoice.from_document(row)

        logger.info(f"Invoice {invoice_id} marked paid by user {owner.id}")
        return updated

    def delete(self, owner: User, invoice_id: str) -> bool:
        """
        Delete an invoice permanently.

        Returns:
            True if deleted, False if not found.
        """
        current = self.get_by_id(owner, invoice_id)
        if current is None:
            return False

        try:
            self.appwrite.delete_document(self.database_id, self.collection_id, invoice_id)
        except RemoteServiceError as e:
            # Deleted by a concurrent request since the read
            if e.is_not_found:
                return False
            raise

        logger.info(f"Invoice {invoice_id} deleted by user {owner.id}")
        return True
