from __future__ import annotations

from fastapi.testclient import TestClient

from storefront.app import create_app
from storefront.core.config import Settings
from storefront.store import InMemoryDocumentStore, InMemoryIdentityProvider


def make_settings(**overrides) -> Settings:
    values = {
        "firebase_project_id": "test-project",
        "use_in_memory_backends": True,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class InMemoryApp:
    """A test client wired to fresh in-memory backends."""

    def __init__(self, raise_server_exceptions: bool = True):
        self.store = InMemoryDocumentStore()
        self.identity = InMemoryIdentityProvider()
        self.app = create_app(make_settings(), self.store, self.identity)
        self.client = TestClient(self.app, raise_server_exceptions=raise_server_exceptions)

    def register(self, email="ada@example.com", password="secret1", **extra):
        return self.client.post(
            "/api/auth/register",
            json={"email": email, "password": password, **extra},
        )

    def login(self, email="ada@example.com", password="secret1"):
        return self.client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )

    def auth_headers(self, email="ada@example.com", password="secret1") -> dict:
        if self.identity._find_by_email(email) is None:
            self.register(email=email, password=password)
        token = self.login(email=email, password=password).json()["token"]
        return {"Authorization": f"Bearer {token}"}
