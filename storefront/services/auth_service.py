from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from storefront.core.constants import MIN_PASSWORD_LENGTH, USERS_COLLECTION
from storefront.core.errors import UserNotFoundError, ValidationError
from storefront.models.user import (
    AuthToken,
    LoginRequest,
    RegisterRequest,
    UserProfile,
)
from storefront.store import DocumentStore, IdentityProvider, IdentityRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _profile_from_record(record: IdentityRecord) -> UserProfile:
    return UserProfile(
        id=record.uid,
        email=record.email or "",
        displayName=record.display_name,
        photoUrl=record.photo_url,
        phoneNumber=record.phone_number,
        createdAt=_utcnow(),
        isActive=True,
    )


class AuthService:
    """Registration, sign-in and session handling on top of the identity provider.

    Every registered account is mirrored into the ``users`` collection as a
    profile document keyed by the provider uid.
    """

    def __init__(self, store: DocumentStore, identity: IdentityProvider):
        self._store = store
        self._identity = identity

    def register(self, payload: RegisterRequest) -> UserProfile:
        logger.info("Creating new user with email: %s", payload.email)
        if not payload.email or not payload.password:
            raise ValidationError("Email and password are required")
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        record = self._identity.create_user(
            email=payload.email,
            password=payload.password,
            display_name=payload.displayName,
            phone_number=payload.phoneNumber,
        )
        profile = _profile_from_record(record)
        self._store.set(USERS_COLLECTION, profile.id, profile.to_document())

        logger.info("Successfully created user. UserId: %s", profile.id)
        return profile

    def login(self, payload: LoginRequest) -> AuthToken:
        logger.info("Authenticating user with email: %s", payload.email)
        if not payload.email or not payload.password:
            raise ValidationError("Email and password are required")

        result = self._identity.sign_in_with_password(payload.email, payload.password)

        try:
            self._store.update(USERS_COLLECTION, result.uid, {"lastLoginAt": _utcnow()})
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to update last login time for %s: %s", result.uid, exc)

        logger.info("Successfully authenticated user. UserId: %s", result.uid)
        return AuthToken(
            token=result.id_token,
            refreshToken=result.refresh_token,
            expiresIn=result.expires_in,
            userId=result.uid,
        )

    def verify_token(self, id_token: Optional[str]) -> str:
        logger.info("Verifying token")
        if not id_token or not id_token.strip():
            logger.warning("Token cannot be empty")
            raise ValidationError("Token cannot be empty")
        return self._identity.verify_id_token(id_token.strip())

    def logout(self, uid: Optional[str]) -> None:
        logger.info("Revoking sessions for user ID: %s", uid)
        if not uid:
            logger.warning("User ID cannot be empty")
            raise ValidationError("User ID cannot be empty")

        self._identity.revoke_refresh_tokens(uid)
        logger.info("Successfully revoked sessions for user ID: %s", uid)

    def get_current_user(self, uid: Optional[str]) -> UserProfile:
        logger.info("Retrieving user information for ID: %s", uid)
        if not uid:
            logger.warning("User ID cannot be empty")
            raise ValidationError("User ID cannot be empty")

        data = self._store.get(USERS_COLLECTION, uid)
        if data is not None:
            return UserProfile.from_document(uid, data)

        # Known to the provider but never mirrored (e.g. created in the console).
        record = self._identity.get_user(uid)
        if record is None:
            raise UserNotFoundError(uid)

        profile = _profile_from_record(record)
        self._store.set(USERS_COLLECTION, profile.id, profile.to_document())
        logger.info("Created missing profile document for user ID: %s", uid)
        return profile
