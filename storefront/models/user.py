from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class UserProfile(BaseModel):
    id: str
    email: str
    displayName: Optional[str] = None
    photoUrl: Optional[str] = None
    phoneNumber: Optional[str] = None

    # Firestore fields maintained by the auth flow
    createdAt: datetime
    lastLoginAt: Optional[datetime] = None
    isActive: bool = True

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "UserProfile":
        payload = dict(data)
        payload["id"] = doc_id
        return cls.model_validate(payload)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})


# Request bodies keep email/password optional so that missing values reach the
# auth service and are reported with its messages.
class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    displayName: Optional[str] = None
    phoneNumber: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class VerifyTokenRequest(BaseModel):
    idToken: Optional[str] = None


class AuthToken(BaseModel):
    token: str
    refreshToken: Optional[str] = None
    expiresIn: Optional[str] = None
    userId: str
