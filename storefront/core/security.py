from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from storefront.core.errors import UnauthorizedError
from storefront.dependencies import get_auth_service
from storefront.services import AuthService


security = HTTPBearer(auto_error=False)


class UserContext(BaseModel):
    uid: str


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserContext:
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    uid = auth_service.verify_token(credentials.credentials)
    return UserContext(uid=uid)
