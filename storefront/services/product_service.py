from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from storefront.core.constants import PRODUCTS_COLLECTION
from storefront.core.errors import ProductNotFoundError, ValidationError
from storefront.models.product import (
    DEMO_PRODUCTS,
    CreateProductRequest,
    Product,
    UpdateProductRequest,
)
from storefront.store import DocumentStore

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, store: DocumentStore):
        self._store = store

    def _require_id(self, product_id: str) -> None:
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID cannot be empty")

    def _load(self, product_id: str) -> Product:
        self._require_id(product_id)
        data = self._store.get(PRODUCTS_COLLECTION, product_id)
        if data is None:
            raise ProductNotFoundError(product_id)
        return Product.from_document(product_id, data)

    def list_products(self) -> List[Product]:
        logger.info("Fetching all products")
        products = [
            Product.from_document(doc_id, data)
            for doc_id, data in self._store.list_all(PRODUCTS_COLLECTION)
        ]
        logger.info("Retrieved %d products", len(products))
        return products

    def get_product(self, product_id: str) -> Product:
        logger.info("Retrieving product with ID: %s", product_id)
        return self._load(product_id)

    def create_product(self, payload: CreateProductRequest) -> Product:
        logger.info("Creating new product: %s", payload.name)
        data = payload.model_dump()
        product_id = self._store.add(PRODUCTS_COLLECTION, data)
        product = Product.from_document(product_id, data)
        logger.info("Created product with ID: %s", product.id)
        return product

    def update_product(self, product_id: str, payload: UpdateProductRequest) -> Product:
        logger.info("Updating product with ID: %s", product_id)
        self._load(product_id)

        changes = payload.changes()
        if changes:
            self._store.update(PRODUCTS_COLLECTION, product_id, changes)

        product = self._load(product_id)
        logger.info("Updated product: %s", product.name)
        return product

    def delete_product(self, product_id: str) -> bool:
        logger.info("Deleting product with ID: %s", product_id)
        self._load(product_id)
        self._store.delete(PRODUCTS_COLLECTION, product_id)
        logger.info("Deleted product with ID: %s", product_id)
        return True

    def search_products(self, name: Optional[str]) -> List[Product]:
        logger.info("Searching for products with name: %s", name)
        products = self.list_products()
        if not name:
            return products

        needle = name.casefold()
        return [product for product in products if needle in product.name.casefold()]

    def seed_products(self, catalog: Iterable[Dict[str, Any]] = DEMO_PRODUCTS) -> int:
        """Insert the demo catalog into an empty collection.

        Returns the number of products written; 0 when the collection already
        holds at least one product.
        """

        logger.info("Seeding sample products")
        if self._store.has_any(PRODUCTS_COLLECTION):
            logger.info("Products already present, skipping seed")
            return 0

        documents = [CreateProductRequest(**item).model_dump() for item in catalog]
        doc_ids = self._store.add_many(PRODUCTS_COLLECTION, documents)
        for doc in documents:
            logger.info("Added product: %s", doc["name"])
        logger.info("Sample products seeded successfully")
        return len(doc_ids)
