"""Seed the demo product catalog from the command line.

    python -m storefront.seed

Firestore needs no schema; the first write creates the collection. Nothing is
written when the collection already holds products.
"""

from __future__ import annotations

import logging

from storefront.core.config import get_settings
from storefront.core.constants import PRODUCTS_COLLECTION
from storefront.dependencies import build_backends
from storefront.services import ProductService


def main() -> int:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s:%(message)s")
    store, _identity = build_backends(settings)
    return ProductService(store).seed_products()


if __name__ == "__main__":
    written = main()
    print(f"Seeded {written} products into collection '{PRODUCTS_COLLECTION}'.")
