"""
FastAPI application entry point for the storefront API.
"""

from __future__ import annotations

import logging
import os
import uuid
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import Settings, get_settings
from storefront.core.constants import ALLOWED_ORIGINS, REQUEST_ID_HEADER
from storefront.core.error_handlers import install_error_handlers
from storefront.dependencies import build_backends
from storefront.routes import auth, products
from storefront.store import DocumentStore, IdentityProvider

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    document_store: Optional[DocumentStore] = None,
    identity_provider: Optional[IdentityProvider] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if document_store is None or identity_provider is None:
        default_store, default_identity = build_backends(settings)
        document_store = document_store or default_store
        identity_provider = identity_provider or default_identity

    app = FastAPI(title="Storefront API", version="1.0.0")
    app.state.settings = settings
    app.state.document_store = document_store
    app.state.identity_provider = identity_provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if ALLOWED_ORIGINS == ["*"] else ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def assign_request_id(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    install_error_handlers(app)
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(products.router, prefix=settings.api_prefix)

    logger.info(
        "Storefront API ready for project %s (in-memory backends: %s)",
        settings.firebase_project_id,
        settings.use_in_memory_backends,
    )
    return app


def main() -> None:
    uvicorn.run(
        "storefront.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8080")),
        log_level="info",
    )


if __name__ == "__main__":
    main()
