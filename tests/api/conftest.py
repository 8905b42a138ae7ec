"""API test fixtures: authenticated TestClient over in-memory invoice services."""

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from auth.security_middleware import AuthMiddleware
from auth.session import SessionManager


# =============================================================================
# SERVICES DICT
# =============================================================================


@pytest.fixture
def services(invoice_service, dashboard_service):
    return {
        "invoice": invoice_service,
        "dashboard": dashboard_service,
    }


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest.fixture
def mock_session_manager(test_user):
    mock = Mock(spec=SessionManager)
    mock.validate_session.return_value = test_user
    return mock


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(mock_session_manager, services):
    """FastAPI app with auth middleware, error handlers, and data/actions routes."""
    from api.data import create_data_router
    from api.actions import create_actions_router

    app = FastAPI()
    app.add_middleware(AuthMiddleware, session_manager=mock_session_manager)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services), prefix="/api")

    return app


@pytest.fixture
def client(app):
    """Authenticated test client."""
    c = TestClient(app, raise_server_exceptions=False)
    c.cookies.set("session_token", "test-token")
    return c


@pytest.fixture
def unauthed_client(app):
    """Unauthenticated test client (no session cookie)."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def create_invoice(client):
    """Create an invoice through the actions endpoint and return its JSON."""

    def _create(**overrides):
        data = {
            "client_name": "Acme Ltd",
            "client_email": "billing@example.com",
            "amount": "1000",
            "vat_percentage": "7.5",
            "due_date": "2099-01-01",
        }
        data.update(overrides)
        response = client.post("/api/actions", json={
            "domain": "invoice",
            "action": "create",
            "data": data,
        })
        assert response.status_code == 200, response.text
        return response.json()["data"]

    return _create
