from .auth_service import AuthService
from .product_service import ProductService

__all__ = ["AuthService", "ProductService"]
