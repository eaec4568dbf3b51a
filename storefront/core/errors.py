from __future__ import annotations

from typing import Optional


class StorefrontError(Exception):
    """Base class for errors the API reports to its callers."""

    status_code = 500

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ValidationError(StorefrontError):
    status_code = 400


class NotFoundError(StorefrontError):
    status_code = 404


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str):
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id


class UnauthorizedError(StorefrontError):
    status_code = 401


class InvalidCredentialsError(UnauthorizedError):
    def __init__(
        self,
        message: str = "Invalid email or password",
        error_code: Optional[str] = None,
    ):
        super().__init__(message, error_code)


class TokenValidationError(UnauthorizedError):
    def __init__(
        self,
        message: str = "Invalid or expired token",
        error_code: Optional[str] = None,
    ):
        super().__init__(message, error_code)


class IdentityProviderError(UnauthorizedError):
    """An identity provider call was rejected (carries the provider's code)."""


class ConflictError(StorefrontError):
    status_code = 409


class UserAlreadyExistsError(ConflictError):
    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
        self.email = email
