"""
Application entry point.

Wires clients, services, routers and middleware into a FastAPI app.
Run with: uvicorn --factory main:create_app_from_vault
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.actions import create_actions_router
from api.base import success_response
from api.data import create_data_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from auth.api import create_auth_router
from auth.config import AuthConfig
from auth.security_logger import SecurityLogger
from auth.security_middleware import AuthMiddleware
from auth.service import AuthService
from auth.session import SessionManager
from clients.appwrite_client import AppwriteClient
from clients.vault_client import get_appwrite_config
from core.services.dashboard_service import DashboardService
from core.services.invoice_service import InvoiceService

logger = logging.getLogger(__name__)


def create_app(
    appwrite: AppwriteClient,
    database_id: str,
    collection_id: str,
    auth_config: AuthConfig | None = None,
) -> FastAPI:
    """Build the app around an Appwrite client."""
    auth_config = auth_config or AuthConfig()

    invoice_service = InvoiceService(appwrite, database_id, collection_id)
    services = {
        "invoice": invoice_service,
        "dashboard": DashboardService(invoice_service),
    }

    session_manager = SessionManager(appwrite, auth_config)
    auth_service = AuthService(
        config=auth_config,
        appwrite=appwrite,
        session_manager=session_manager,
        security_logger=SecurityLogger(),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        appwrite.close()
        logger.info("Appwrite client closed")

    app = FastAPI(title=auth_config.app_name, lifespan=lifespan)
    app.add_middleware(
        AuthMiddleware,
        session_manager=session_manager,
        cookie_name=auth_config.session_cookie_name,
    )
    # Added last so it runs first: request ids exist before auth responds
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_auth_router(auth_service, auth_config), prefix="/auth")
    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services), prefix="/api")

    @app.get("/health")
    async def health():
        return success_response({"status": "ok"}).model_dump(mode="json")

    return app


def create_app_from_vault() -> FastAPI:
    """Build the app with Appwrite credentials read from Vault."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = get_appwrite_config()
    appwrite = AppwriteClient(
        endpoint=config["endpoint"],
        project_id=config["project_id"],
        api_key=config["api_key"],
    )
    logger.info(f"Using Appwrite project {config['project_id']} at {config['endpoint']}")
    return create_app(appwrite, config["database_id"], config["collection_id"])
