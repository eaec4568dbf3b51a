"""
Document store abstraction for Firestore and an in-memory test implementation.

Documents are plain dicts addressed by ``(collection, doc_id)``. The key is
never part of the stored body.
"""

from __future__ import annotations

import copy
import threading
import uuid
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from google.api_core import exceptions as google_exceptions

Document = Dict[str, Any]


class DocumentMissingError(LookupError):
    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"Document {collection}/{doc_id} does not exist")
        self.collection = collection
        self.doc_id = doc_id


class DocumentStore(Protocol):
    """Interface for document access."""

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    def list_all(self, collection: str) -> List[Tuple[str, Document]]:
        ...

    def add(self, collection: str, data: Document) -> str:
        ...

    def add_many(self, collection: str, documents: Iterable[Document]) -> List[str]:
        ...

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        ...

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        ...

    def has_any(self, collection: str) -> bool:
        ...


def _new_doc_id() -> str:
    # Firestore auto ids are 20 characters.
    return uuid.uuid4().hex[:20]


class InMemoryDocumentStore:
    """Simple in-memory document store for development and tests."""

    def __init__(self):
        self._lock = threading.Lock()
        self.collections: Dict[str, Dict[str, Document]] = {}

    def reset(self) -> None:
        with self._lock:
            self.collections.clear()

    def _collection(self, collection: str) -> Dict[str, Document]:
        return self.collections.setdefault(collection, {})

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            data = self._collection(collection).get(doc_id)
            return copy.deepcopy(data) if data is not None else None

    def list_all(self, collection: str) -> List[Tuple[str, Document]]:
        with self._lock:
            return [
                (doc_id, copy.deepcopy(data))
                for doc_id, data in self._collection(collection).items()
            ]

    def add(self, collection: str, data: Document) -> str:
        doc_id = _new_doc_id()
        with self._lock:
            self._collection(collection)[doc_id] = copy.deepcopy(data)
        return doc_id

    def add_many(self, collection: str, documents: Iterable[Document]) -> List[str]:
        staged = [(_new_doc_id(), copy.deepcopy(data)) for data in documents]
        with self._lock:
            self._collection(collection).update(staged)
        return [doc_id for doc_id, _ in staged]

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        with self._lock:
            self._collection(collection)[doc_id] = copy.deepcopy(data)

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        with self._lock:
            docs = self._collection(collection)
            if doc_id not in docs:
                raise DocumentMissingError(collection, doc_id)
            docs[doc_id].update(copy.deepcopy(fields))

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            self._collection(collection).pop(doc_id, None)

    def has_any(self, collection: str) -> bool:
        with self._lock:
            return bool(self._collection(collection))


class FirestoreDocumentStore:
    """Document store backed by a ``google.cloud.firestore.Client``."""

    def __init__(self, client: Any):
        self._client = client

    def _ref(self, collection: str, doc_id: str):
        return self._client.collection(collection).document(doc_id)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        snapshot = self._ref(collection, doc_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def list_all(self, collection: str) -> List[Tuple[str, Document]]:
        return [
            (doc.id, doc.to_dict() or {})
            for doc in self._client.collection(collection).stream()
        ]

    def add(self, collection: str, data: Document) -> str:
        doc_ref = self._client.collection(collection).document()
        doc_ref.set(data)
        return doc_ref.id

    def add_many(self, collection: str, documents: Iterable[Document]) -> List[str]:
        batch = self._client.batch()
        doc_ids: List[str] = []
        for data in documents:
            doc_ref = self._client.collection(collection).document()
            batch.create(doc_ref, data)
            doc_ids.append(doc_ref.id)
        batch.commit()
        return doc_ids

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        self._ref(collection, doc_id).set(data)

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        try:
            self._ref(collection, doc_id).update(fields)
        except google_exceptions.NotFound as exc:
            raise DocumentMissingError(collection, doc_id) from exc

    def delete(self, collection: str, doc_id: str) -> None:
        self._ref(collection, doc_id).delete()

    def has_any(self, collection: str) -> bool:
        return len(self._client.collection(collection).limit(1).get()) > 0
