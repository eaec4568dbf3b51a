from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends

from storefront.core.security import UserContext, get_current_user
from storefront.dependencies import get_auth_service
from storefront.models.user import (
    AuthToken,
    LoginRequest,
    RegisterRequest,
    UserProfile,
    VerifyTokenRequest,
)
from storefront.services import AuthService


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register")
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    return auth_service.register(payload)


@router.post("/login")
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthToken:
    return auth_service.login(payload)


@router.post("/logout")
def logout(
    current_user: UserContext = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> Dict[str, str]:
    auth_service.logout(current_user.uid)
    return {"message": "Sessions revoked"}


@router.post("/verify-token")
def verify_token(
    payload: VerifyTokenRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    return auth_service.verify_token(payload.idToken)


@router.get("/me")
def auth_me(
    current_user: UserContext = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    return auth_service.get_current_user(current_user.uid)
