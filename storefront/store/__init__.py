from .documents import (
    DocumentMissingError,
    DocumentStore,
    FirestoreDocumentStore,
    InMemoryDocumentStore,
)
from .identity import (
    FirebaseIdentityProvider,
    IdentityProvider,
    IdentityRecord,
    InMemoryIdentityProvider,
    SignInResult,
)

__all__ = [
    "DocumentMissingError",
    "DocumentStore",
    "FirestoreDocumentStore",
    "InMemoryDocumentStore",
    "FirebaseIdentityProvider",
    "IdentityProvider",
    "IdentityRecord",
    "InMemoryIdentityProvider",
    "SignInResult",
]
