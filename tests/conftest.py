"""Shared test fixtures for the invoice dashboard test suite."""

import json
from datetime import timedelta
from pathlib import Path
from uuid import uuid4

import pytest
from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
# override=True ensures .env takes precedence over shell env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

# Reset vault client singleton to pick up env vars
import clients.vault_client as vault_module
vault_module._vault_client_instance = None
vault_module._secret_cache.clear()

from auth.types import User
from clients.appwrite_client import RemoteServiceError, UNIQUE_ID
from utils.timezone import now_utc


# =============================================================================
# TEST USER CONSTANTS
# =============================================================================

# Primary test user - use for single-user tests
TEST_USER = User(id="user-0001", email="testuser@example.com", name="Test User")

# Secondary test user - use for owner isolation tests
TEST_USER_B = User(id="user-0002", email="testuser-b@example.com", name="Test User B")

TEST_DATABASE_ID = "test-db"
TEST_COLLECTION_ID = "test-invoices"


# =============================================================================
# IN-MEMORY APPWRITE
# =============================================================================


class FakeAppwrite:
    """
    In-memory stand-in for AppwriteClient.

    Same method signatures and the same RemoteServiceError statuses as the
    real API for the calls the app makes. Supports equal/orderDesc/limit/
    offset queries.
    """

    DEFAULT_LIMIT = 25

    def __init__(self):
        self.documents: dict[str, dict] = {}
        self.accounts: dict[str, dict] = {}  # email -> account incl. password
        self.sessions: dict[str, str] = {}  # secret -> user id
        self.writes = 0
        self.closed = False
        self._clock = now_utc()

    def _tick(self) -> str:
        # Strictly increasing timestamps keep ordering deterministic
        self._clock += timedelta(milliseconds=1)
        return self._clock.isoformat(timespec="microseconds")

    # Documents

    def create_document(self, database_id, collection_id, document_id, data):
        data = json.loads(json.dumps(data))  # as sent over the wire
        doc_id = uuid4().hex if document_id == UNIQUE_ID else document_id
        if doc_id in self.documents:
            raise RemoteServiceError("Document already exists", 409, "document_already_exists")
        stamp = self._tick()
        doc = {"$id": doc_id, "$createdAt": stamp, "$updatedAt": stamp, **data}
        self.documents[doc_id] = doc
        self.writes += 1
        return dict(doc)

    def get_document(self, database_id, collection_id, document_id):
        if document_id not in self.documents:
            raise RemoteServiceError("Document not found", 404, "document_not_found")
        return dict(self.documents[document_id])

    def update_document(self, database_id, collection_id, document_id, data):
        data = json.loads(json.dumps(data))
        if document_id not in self.documents:
            raise RemoteServiceError("Document not found", 404, "document_not_found")
        doc = self.documents[document_id]
        doc.update(data)
        doc["$updatedAt"] = self._tick()
        self.writes += 1
        return dict(doc)

    def delete_document(self, database_id, collection_id, document_id):
        if document_id not in self.documents:
            raise RemoteServiceError("Document not found", 404, "document_not_found")
        del self.documents[document_id]
        self.writes += 1

    def list_documents(self, database_id, collection_id, queries=None):
        docs = list(self.documents.values())
        limit, offset = self.DEFAULT_LIMIT, 0

        for raw in queries or []:
            query = json.loads(raw)
            method = query["method"]
            if method == "equal":
                docs = [d for d in docs if d.get(query["attribute"]) in query["values"]]
            elif method == "orderDesc":
                docs = sorted(docs, key=lambda d: d.get(query["attribute"]), reverse=True)
            elif method == "limit":
                limit = query["values"][0]
            elif method == "offset":
                offset = query["values"][0]

        return [dict(d) for d in docs[offset:offset + limit]]

    # Accounts

    def create_user(self, email, password, name, user_id=UNIQUE_ID):
        if email in self.accounts:
            raise RemoteServiceError("A user with the same email already exists", 409, "user_already_exists")
        account = {
            "$id": uuid4().hex if user_id == UNIQUE_ID else user_id,
            "$createdAt": self._tick(),
            "email": email,
            "name": name,
            "emailVerification": False,
            "password": password,
        }
        self.accounts[email] = account
        return {k: v for k, v in account.items() if k != "password"}

    def create_email_session(self, email, password):
        account = self.accounts.get(email)
        if account is None or account["password"] != password:
            raise RemoteServiceError("Invalid credentials", 401, "user_invalid_credentials")
        secret = uuid4().hex
        self.sessions[secret] = account["$id"]
        created = now_utc()
        return {
            "$id": uuid4().hex,
            "$createdAt": created.isoformat(),
            "userId": account["$id"],
            "expire": (created + timedelta(days=365)).isoformat(),
            "secret": secret,
        }

    def get_account(self, session):
        user_id = self.sessions.get(session)
        if user_id is None:
            raise RemoteServiceError("User (role: guests) missing scope (account)", 401, "general_unauthorized_scope")
        account = next(a for a in self.accounts.values() if a["$id"] == user_id)
        return {k: v for k, v in account.items() if k != "password"}

    def delete_session(self, session, session_id="current"):
        if session not in self.sessions:
            raise RemoteServiceError("User (role: guests) missing scope (account)", 401, "general_unauthorized_scope")
        del self.sessions[session]

    def close(self):
        self.closed = True


# =============================================================================
# USER FIXTURES
# =============================================================================


@pytest.fixture
def test_user() -> User:
    """The primary test user."""
    return TEST_USER


@pytest.fixture
def test_user_b() -> User:
    """The secondary test user (for isolation tests)."""
    return TEST_USER_B


# =============================================================================
# APPWRITE FIXTURES
# =============================================================================


@pytest.fixture
def appwrite() -> FakeAppwrite:
    """Fresh in-memory Appwrite per test."""
    return FakeAppwrite()


@pytest.fixture
def invoice_service(appwrite):
    """InvoiceService over the in-memory Appwrite."""
    from core.services.invoice_service import InvoiceService

    return InvoiceService(appwrite, TEST_DATABASE_ID, TEST_COLLECTION_ID)


@pytest.fixture
def dashboard_service(invoice_service):
    """DashboardService over the in-memory Appwrite."""
    from core.services.dashboard_service import DashboardService

    return DashboardService(invoice_service)
