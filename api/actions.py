"""POST /api/actions - unified mutation endpoint."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from api.base import success_response
from api.data import invoice_payload
from auth.types import User
from core.models import InvoiceCreate, InvoiceUpdate


class ActionRequest(BaseModel):
    domain: str
    action: str
    data: dict


def create_actions_router(services: dict) -> APIRouter:
    router = APIRouter()

    handlers = {
        "invoice": InvoiceHandler(services["invoice"]),
    }

    @router.post("/actions")
    async def perform_action(request: Request, body: ActionRequest):
        handler = handlers.get(body.domain)
        if handler is None:
            raise ValueError(
                f"Unknown domain '{body.domain}'. "
                f"Valid domains: {', '.join(sorted(handlers.keys()))}"
            )

        if body.action not in handler.ALLOWED_ACTIONS:
            raise ValueError(
                f"Action '{body.action}' not allowed on '{body.domain}'. "
                f"Allowed: {', '.join(sorted(handler.ALLOWED_ACTIONS))}"
            )

        method = getattr(handler, f"_handle_{body.action}")
        result = method(request.state.user, dict(body.data))
        return success_response(result, request.state.request_id).model_dump(mode="json")

    return router


# =============================================================================
# HANDLER CLASSES
# =============================================================================


def _require_id(data: dict) -> str:
    invoice_id = data.pop("id", None)
    if not invoice_id:
        raise ValueError("'id' is required")
    return str(invoice_id)


class InvoiceHandler:
    ALLOWED_ACTIONS = {"create", "update", "mark_paid", "delete"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, owner: User, data: dict):
        invoice = self.service.create(owner, InvoiceCreate(**data))
        return invoice_payload(invoice)

    def _handle_update(self, owner: User, data: dict):
        invoice_id = _require_id(data)
        invoice = self.service.update(owner, invoice_id, InvoiceUpdate(**data))
        return invoice_payload(invoice)

    def _handle_mark_paid(self, owner: User, data: dict):
        invoice = self.service.mark_paid(owner, _require_id(data))
        return invoice_payload(invoice)

    def _handle_delete(self, owner: User, data: dict):
        invoice_id = _require_id(data)
        deleted = self.service.delete(owner, invoice_id)
        if not deleted:
            raise ValueError(f"Invoice {invoice_id} not found")
        return {"deleted": True}
