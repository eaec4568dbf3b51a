from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from storefront.core.security import UserContext, get_current_user
from storefront.dependencies import get_product_service
from storefront.models.product import (
    CreateProductRequest,
    Product,
    UpdateProductRequest,
)
from storefront.services import ProductService


router = APIRouter(prefix="/product", tags=["products"])
logger = logging.getLogger(__name__)


@router.post("/seed")
def seed_products(
    product_service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    inserted = product_service.seed_products()
    if inserted:
        return {"message": "Products seeded successfully", "inserted": inserted}
    return {"message": "Products already seeded", "inserted": 0}


@router.get("")
def list_products(
    _user: UserContext = Depends(get_current_user),
    product_service: ProductService = Depends(get_product_service),
) -> List[Product]:
    return product_service.list_products()


# Declared before "/{product_id}" so "search" is not taken as an id.
@router.get("/search")
def search_products(
    name: Optional[str] = None,
    _user: UserContext = Depends(get_current_user),
    product_service: ProductService = Depends(get_product_service),
) -> List[Product]:
    products = product_service.search_products(name)
    logger.info("Found %d products matching %r", len(products), name)
    return products


@router.get("/{product_id}")
def get_product(
    product_id: str,
    _user: UserContext = Depends(get_current_user),
    product_service: ProductService = Depends(get_product_service),
) -> Product:
    return product_service.get_product(product_id)


@router.post("", status_code=201)
def create_product(
    payload: CreateProductRequest,
    _user: UserContext = Depends(get_current_user),
    product_service: ProductService = Depends(get_product_service),
) -> Product:
    return product_service.create_product(payload)


@router.put("/{product_id}")
def update_product(
    product_id: str,
    payload: UpdateProductRequest,
    _user: UserContext = Depends(get_current_user),
    product_service: ProductService = Depends(get_product_service),
) -> Product:
    return product_service.update_product(product_id, payload)


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    _user: UserContext = Depends(get_current_user),
    product_service: ProductService = Depends(get_product_service),
) -> bool:
    return product_service.delete_product(product_id)
