"""Invoice domain models.

Money is Decimal throughout. vat_amount and total_amount are derived by
core.totals.compute_totals() and are never accepted from callers: the
create/update payloads carry only the inputs.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, EmailStr, Field

from core.models.line_item import InvoiceItem, items_from_document
from core.totals import DEFAULT_VAT_PERCENTAGE
from utils.timezone import parse_date, parse_iso


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    UNPAID = "unpaid"
    PAID = "paid"
    # Displayable only. Nothing in this system transitions into it.
    PENDING = "pending"


class InvoiceCreate(BaseModel):
    """Data required to create an invoice."""

    client_name: str = Field(..., min_length=1, max_length=200)
    client_email: EmailStr
    amount: Decimal = Field(..., ge=0)
    vat_percentage: Decimal = Field(DEFAULT_VAT_PERCENTAGE, ge=0)
    due_date: date
    items: list[InvoiceItem] = Field(default_factory=list)

    model_config = {"str_strip_whitespace": True, "extra": "forbid"}


class InvoiceUpdate(BaseModel):
    """Data that can be updated on an invoice. All fields optional."""

    client_name: str | None = Field(None, min_length=1, max_length=200)
    client_email: EmailStr | None = None
    amount: Decimal | None = Field(None, ge=0)
    vat_percentage: Decimal | None = Field(None, ge=0)
    due_date: date | None = None
    items: list[InvoiceItem] | None = None

    model_config = {"str_strip_whitespace": True, "extra": "forbid"}


class Invoice(BaseModel):
    """Full invoice entity as stored."""

    id: str
    user_id: str
    client_name: str
    client_email: str
    amount: Decimal
    vat_percentage: Decimal
    vat_amount: Decimal
    total_amount: Decimal
    due_date: date
    status: InvoiceStatus
    created_at: datetime
    updated_at: datetime | None = None
    items: list[InvoiceItem] = Field(default_factory=list)

    @property
    def is_paid(self) -> bool:
        """Whether invoice is paid."""
        return self.status == InvoiceStatus.PAID

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Invoice":
        """
        Build an Invoice from a document returned by the BaaS.

        System attributes come prefixed with '$'. created_at falls back to
        $createdAt for documents written without it.
        """
        created_raw = doc.get("created_at") or doc.get("$createdAt")
        updated_raw = doc.get("$updatedAt")

        return cls(
            id=doc["$id"],
            user_id=doc["user_id"],
            client_name=doc["client_name"],
            client_email=doc["client_email"],
            amount=doc["amount"],
            vat_percentage=doc["vat_percentage"],
            vat_amount=doc["vat_amount"],
            total_amount=doc["total_amount"],
            due_date=parse_date(doc["due_date"]),
            status=doc.get("status") or InvoiceStatus.UNPAID,
            created_at=parse_iso(created_raw),
            updated_at=parse_iso(updated_raw) if updated_raw else None,
            items=items_from_document(doc.get("items")),
        )
