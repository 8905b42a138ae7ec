"""
Appwrite REST client for documents and accounts.

Thin wrapper over the Appwrite HTTP API using requests. Server calls are
authenticated with the project API key; calls on behalf of a signed-in
user carry that user's session secret instead.

Fail-fast: every transport error and every non-2xx response becomes a
RemoteServiceError. No retries.
"""

import json
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

# Ask the server to generate the document/user id
UNIQUE_ID = "unique()"


class RemoteServiceError(Exception):
    """Raised when an Appwrite request fails."""

    def __init__(self, message: str, status_code: int | None = None, error_type: str | None = None):
        self.status_code = status_code
        self.error_type = error_type
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409


# Query helpers. Appwrite 1.5+ takes queries as JSON strings.


def query_equal(attribute: str, value: Any) -> str:
    """Match documents where attribute equals value."""
    values = value if isinstance(value, list) else [value]
    return json.dumps({"method": "equal", "attribute": attribute, "values": values})


def query_order_desc(attribute: str) -> str:
    """Sort results by attribute, newest/largest first."""
    return json.dumps({"method": "orderDesc", "attribute": attribute})


def query_limit(limit: int) -> str:
    """Return at most limit documents."""
    return json.dumps({"method": "limit", "values": [limit]})


def query_offset(offset: int) -> str:
    """Skip the first offset documents."""
    return json.dumps({"method": "offset", "values": [offset]})


class AppwriteClient:
    """
    Appwrite document database and account API client.

    Usage:
        client = AppwriteClient(endpoint, project_id, api_key)
        doc = client.create_document(db_id, collection_id, UNIQUE_ID, {...})
        session = client.create_email_session("a@example.com", "secret")
        user = client.get_account(session["secret"])
    """

    def __init__(self, endpoint: str, project_id: str, api_key: str, timeout: float = 10):
        """
        Initialize with project credentials.

        Args:
            endpoint: API root, e.g. https://cloud.appwrite.io/v1
            project_id: Appwrite project id
            api_key: Server API key with databases and users scopes
            timeout: Per-request timeout in seconds

        Raises:
            ValueError: If any credential is empty
        """
        if not endpoint:
            raise ValueError("endpoint is required")
        if not project_id:
            raise ValueError("project_id is required")
        if not api_key:
            raise ValueError("api_key is required")

        self.endpoint = endpoint.rstrip("/")
        self.project_id = project_id
        self.api_key = api_key
        self.timeout = timeout
        self._http = requests.Session()

    def _headers(self, session: str | None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-Appwrite-Project": self.project_id,
        }
        if session is not None:
            headers["X-Appwrite-Session"] = session
        else:
            headers["X-Appwrite-Key"] = self.api_key
        return headers

    def _request(
        self,
        method: str,
        path: str,
        json_body: dict | None = None,
        params: dict | None = None,
        session: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Send a request and decode the JSON response.

        Returns:
            Decoded body, or None for empty (204) responses

        Raises:
            RemoteServiceError: On connection failure, timeout, or non-2xx status
        """
        url = f"{self.endpoint}{path}"

        try:
            response = self._http.request(
                method,
                url,
                json=json_body,
                params=params,
                headers=self._headers(session),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Appwrite {method} {path} failed: {e}")
            raise RemoteServiceError(f"Connection failed: {e}")

        if response.status_code == 204 or not response.content:
            if response.status_code >= 400:
                raise RemoteServiceError(
                    f"Appwrite error {response.status_code}", status_code=response.status_code
                )
            return None

        try:
            body = response.json()
        except json.JSONDecodeError:
            logger.error(f"Appwrite returned invalid JSON for {method} {path}: {response.text[:200]}")
            raise RemoteServiceError("Invalid response from Appwrite", status_code=response.status_code)

        if response.status_code >= 400:
            message = body.get("message", "Unknown error") if isinstance(body, dict) else "Unknown error"
            error_type = body.get("type") if isinstance(body, dict) else None
            logger.error(f"Appwrite {method} {path} returned {response.status_code}: {message}")
            raise RemoteServiceError(message, status_code=response.status_code, error_type=error_type)

        return body

    def _documents_path(self, database_id: str, collection_id: str) -> str:
        return f"/databases/{database_id}/collections/{collection_id}/documents"

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    def create_document(
        self, database_id: str, collection_id: str, document_id: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a document. Pass UNIQUE_ID to let the server pick the id."""
        return self._request(
            "POST",
            self._documents_path(database_id, collection_id),
            json_body={"documentId": document_id, "data": data},
        )

    def get_document(self, database_id: str, collection_id: str, document_id: str) -> dict[str, Any]:
        """Get a document by id. Missing documents raise RemoteServiceError (404)."""
        return self._request(
            "GET",
            f"{self._documents_path(database_id, collection_id)}/{document_id}",
        )

    def update_document(
        self, database_id: str, collection_id: str, document_id: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        """Patch the given fields on a document."""
        return self._request(
            "PATCH",
            f"{self._documents_path(database_id, collection_id)}/{document_id}",
            json_body={"data": data},
        )

    def delete_document(self, database_id: str, collection_id: str, document_id: str) -> None:
        """Delete a document permanently."""
        self._request(
            "DELETE",
            f"{self._documents_path(database_id, collection_id)}/{document_id}",
        )

    def list_documents(
        self, database_id: str, collection_id: str, queries: list[str] | None = None
    ) -> list[dict[str, Any]]:
        """
        List documents matching the queries.

        Args:
            queries: JSON query strings built with the query_* helpers

        Returns:
            The matching documents (one page; use query_limit/query_offset to page)
        """
        params = {"queries[]": queries} if queries else None
        body = self._request(
            "GET",
            self._documents_path(database_id, collection_id),
            params=params,
        )
        return body.get("documents", []) if body else []

    # -------------------------------------------------------------------------
    # Accounts and sessions
    # -------------------------------------------------------------------------

    def create_user(self, email: str, password: str, name: str, user_id: str = UNIQUE_ID) -> dict[str, Any]:
        """Register a new account."""
        body = self._request(
            "POST",
            "/account",
            json_body={"userId": user_id, "email": email, "password": password, "name": name},
        )
        logger.info(f"Appwrite account created: {body.get('$id') if body else None}")
        return body

    def create_email_session(self, email: str, password: str) -> dict[str, Any]:
        """
        Create an email/password session.

        Sent with the API key so the response includes the session secret,
        which the caller then uses as the user's session token.
        """
        return self._request(
            "POST",
            "/account/sessions/email",
            json_body={"email": email, "password": password},
        )

    def get_account(self, session: str) -> dict[str, Any]:
        """Get the account that owns the session."""
        return self._request("GET", "/account", session=session)

    def delete_session(self, session: str, session_id: str = "current") -> None:
        """Delete a session (sign out)."""
        self._request("DELETE", f"/account/sessions/{session_id}", session=session)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._http.close()
