"""
Dependency wiring for the FastAPI app.

Provider clients are built once by ``create_app`` and kept on ``app.state``;
request handlers receive them (and the services built on them) through the
getters below.
"""

from __future__ import annotations

from typing import Tuple

from fastapi import Depends, Request
from firebase_admin import firestore

from storefront.core.config import Settings
from storefront.firebase_admin_init import initialize_firebase_app
from storefront.services import AuthService, ProductService
from storefront.store import (
    DocumentStore,
    FirebaseIdentityProvider,
    FirestoreDocumentStore,
    IdentityProvider,
    InMemoryDocumentStore,
    InMemoryIdentityProvider,
)


def build_backends(settings: Settings) -> Tuple[DocumentStore, IdentityProvider]:
    if settings.use_in_memory_backends:
        return InMemoryDocumentStore(), InMemoryIdentityProvider()

    firebase_app = initialize_firebase_app(settings)
    store = FirestoreDocumentStore(firestore.client(app=firebase_app))
    identity = FirebaseIdentityProvider(
        firebase_app,
        web_api_key=settings.firebase_web_api_key,
        identity_toolkit_url=settings.identity_toolkit_url,
        timeout=settings.request_timeout,
    )
    return store, identity


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def get_auth_service(
    store: DocumentStore = Depends(get_document_store),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> AuthService:
    return AuthService(store, identity)


def get_product_service(
    store: DocumentStore = Depends(get_document_store),
) -> ProductService:
    return ProductService(store)
