"""Invoice line item models.

Line items are free-form user input. The line amount is stored as given
and is NOT checked against quantity * rate.
"""

import json
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class InvoiceItem(BaseModel):
    """A single billed line on an invoice."""

    name: str = Field(..., min_length=1, max_length=200)
    quantity: Decimal = Field(Decimal(1), ge=0)
    rate: Decimal = Field(Decimal(0), ge=0)
    amount: Decimal = Field(Decimal(0), ge=0)

    model_config = {"str_strip_whitespace": True}

    @property
    def expected_amount(self) -> Decimal:
        """quantity * rate, for display next to the stored amount."""
        return self.quantity * self.rate


def items_to_document(items: list[InvoiceItem]) -> str:
    """Serialize line items to the JSON string stored on the document."""
    return json.dumps([
        {
            "name": item.name,
            "quantity": str(item.quantity),
            "rate": str(item.rate),
            "amount": str(item.amount),
        }
        for item in items
    ])


def items_from_document(raw: Any) -> list[InvoiceItem]:
    """
    Parse line items from a stored document value.

    Accepts the JSON string written by items_to_document(), an already
    decoded list, or None.
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid items JSON on invoice document: {e}")
    if not isinstance(raw, list):
        raise ValueError("Invoice items must be a list")
    return [InvoiceItem.model_validate(entry) for entry in raw]
