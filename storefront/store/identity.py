"""
Identity provider abstraction for Firebase Authentication and an in-memory
test implementation.

Implementations raise the service's own errors (``storefront.core.errors``)
rather than SDK exceptions.
"""

from __future__ import annotations

import hashlib
import secrets
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import requests
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError

from storefront.core.errors import (
    IdentityProviderError,
    InvalidCredentialsError,
    TokenValidationError,
    UserAlreadyExistsError,
    ValidationError,
)


@dataclass
class IdentityRecord:
    uid: str
    email: Optional[str]
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    phone_number: Optional[str] = None


@dataclass
class SignInResult:
    uid: str
    id_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[str] = None


class IdentityProvider(Protocol):
    """Interface for account and token operations."""

    def create_user(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> IdentityRecord:
        ...

    def get_user(self, uid: str) -> Optional[IdentityRecord]:
        ...

    def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        ...

    def verify_id_token(self, id_token: str) -> str:
        ...

    def revoke_refresh_tokens(self, uid: str) -> None:
        ...


def _hash_password(password: str, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(8)
    return salt + "$" + hashlib.sha256((salt + password).encode()).hexdigest()


def _verify_password(password: str, stored: str) -> bool:
    salt, _, _ = stored.partition("$")
    return secrets.compare_digest(_hash_password(password, salt), stored)


class InMemoryIdentityProvider:
    """Simple in-memory identity provider for development and tests."""

    def __init__(self):
        self._lock = threading.Lock()
        self.users: Dict[str, IdentityRecord] = {}
        self._passwords: Dict[str, str] = {}
        self._tokens: Dict[str, str] = {}

    def reset(self) -> None:
        with self._lock:
            self.users.clear()
            self._passwords.clear()
            self._tokens.clear()

    def _find_by_email(self, email: str) -> Optional[IdentityRecord]:
        wanted = email.strip().lower()
        for record in self.users.values():
            if (record.email or "").lower() == wanted:
                return record
        return None

    def create_user(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> IdentityRecord:
        with self._lock:
            if self._find_by_email(email) is not None:
                raise UserAlreadyExistsError(email)
            record = IdentityRecord(
                uid=uuid.uuid4().hex[:28],
                email=email,
                display_name=display_name,
                phone_number=phone_number,
            )
            self.users[record.uid] = record
            self._passwords[record.uid] = _hash_password(password)
            return record

    def get_user(self, uid: str) -> Optional[IdentityRecord]:
        with self._lock:
            return self.users.get(uid)

    def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        with self._lock:
            record = self._find_by_email(email)
            if record is None or not _verify_password(
                password, self._passwords[record.uid]
            ):
                raise InvalidCredentialsError(error_code="INVALID_LOGIN_CREDENTIALS")
            token = secrets.token_urlsafe(32)
            self._tokens[token] = record.uid
            return SignInResult(
                uid=record.uid,
                id_token=token,
                refresh_token=secrets.token_urlsafe(32),
                expires_in="3600",
            )

    def verify_id_token(self, id_token: str) -> str:
        with self._lock:
            uid = self._tokens.get(id_token)
        if uid is None:
            raise TokenValidationError(error_code="INVALID_ID_TOKEN")
        return uid

    def revoke_refresh_tokens(self, uid: str) -> None:
        with self._lock:
            if uid not in self.users:
                raise IdentityProviderError(
                    f"Failed to revoke sessions: no user record for {uid}",
                    error_code="USER_NOT_FOUND",
                )
            for token in [t for t, owner in self._tokens.items() if owner == uid]:
                del self._tokens[token]


def _record_from_firebase(user: Any) -> IdentityRecord:
    return IdentityRecord(
        uid=user.uid,
        email=user.email,
        display_name=user.display_name,
        photo_url=user.photo_url,
        phone_number=user.phone_number,
    )


def _rest_error_code(response: requests.Response) -> Optional[str]:
    try:
        message = response.json().get("error", {}).get("message")
    except ValueError:
        return None
    if not message:
        return None
    # e.g. "TOO_MANY_ATTEMPTS_TRY_LATER : Access to this account has been ..."
    return message.split(" : ", 1)[0].strip()


class FirebaseIdentityProvider:
    """Identity provider backed by ``firebase_admin.auth``.

    Password sign-in is not part of the Admin SDK, so it goes through the
    Identity Toolkit REST endpoint with the project's web API key.
    """

    def __init__(
        self,
        app: Any,
        web_api_key: Optional[str] = None,
        identity_toolkit_url: str = "https://identitytoolkit.googleapis.com/v1",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._app = app
        self._web_api_key = web_api_key
        self._identity_toolkit_url = identity_toolkit_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def create_user(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> IdentityRecord:
        try:
            user = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                phone_number=phone_number,
                app=self._app,
            )
        except auth.EmailAlreadyExistsError as exc:
            raise UserAlreadyExistsError(email) from exc
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        except FirebaseError as exc:
            raise IdentityProviderError(
                f"Failed to create user: {exc}", error_code=exc.code
            ) from exc
        return _record_from_firebase(user)

    def get_user(self, uid: str) -> Optional[IdentityRecord]:
        try:
            user = auth.get_user(uid, app=self._app)
        except auth.UserNotFoundError:
            return None
        except FirebaseError as exc:
            raise IdentityProviderError(
                f"Failed to look up user: {exc}", error_code=exc.code
            ) from exc
        return _record_from_firebase(user)

    def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        if not self._web_api_key:
            raise RuntimeError("Password sign-in requires FIREBASE_WEB_API_KEY to be set")

        response = self._session.post(
            f"{self._identity_toolkit_url}/accounts:signInWithPassword",
            params={"key": self._web_api_key},
            json={"email": email, "password": password, "returnSecureToken": True},
            timeout=self._timeout,
        )
        if response.status_code in (400, 401, 403):
            raise InvalidCredentialsError(error_code=_rest_error_code(response))
        response.raise_for_status()

        payload = response.json()
        return SignInResult(
            uid=payload["localId"],
            id_token=payload["idToken"],
            refresh_token=payload.get("refreshToken"),
            expires_in=payload.get("expiresIn"),
        )

    def verify_id_token(self, id_token: str) -> str:
        try:
            decoded = auth.verify_id_token(id_token, app=self._app, check_revoked=True)
        except auth.ExpiredIdTokenError as exc:
            raise TokenValidationError("Token has expired", error_code=exc.code) from exc
        except auth.RevokedIdTokenError as exc:
            raise TokenValidationError("Token has been revoked", error_code=exc.code) from exc
        except auth.CertificateFetchError:
            # Provider outage, not a bad token.
            raise
        except FirebaseError as exc:
            raise TokenValidationError(f"Invalid token: {exc}", error_code=exc.code) from exc
        except ValueError as exc:
            raise TokenValidationError(f"Invalid token: {exc}") from exc
        return decoded.get("uid") or decoded["sub"]

    def revoke_refresh_tokens(self, uid: str) -> None:
        try:
            auth.revoke_refresh_tokens(uid, app=self._app)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        except FirebaseError as exc:
            raise IdentityProviderError(
                f"Failed to revoke sessions: {exc}", error_code=exc.code
            ) from exc
