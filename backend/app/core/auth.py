from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException, Request

from app.core.config import settings
from app.core.roles import Capability, Role, has_capability


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, resolved from a bearer token."""

    user_id: str
    role: Role
    email: str | None = None

    @property
    def label(self) -> str:
        return self.email or self.user_id


def create_access_token(
    user_id: str,
    role: Role,
    email: str | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """Issue a signed access token. Used by tooling and tests."""
    payload = {
        "sub": user_id,
        "role": role.value,
        "exp": datetime.now(UTC)
        + (expires_in or timedelta(minutes=settings.JWT_EXPIRE_MINUTES)),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Actor:
    """Decode and validate an access token.

    Raises jwt.InvalidTokenError (including ExpiredSignatureError) when the
    token is invalid, has no subject, or carries an unknown role.
    """
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    user_id = payload.get("sub")
    if not user_id:
        raise jwt.InvalidTokenError("Token without subject")
    try:
        role = Role.parse(str(payload.get("role", "")))
    except ValueError:
        raise jwt.InvalidTokenError("Token carries an unknown role") from None
    return Actor(user_id=str(user_id), role=role, email=payload.get("email"))


def get_current_actor(request: Request) -> Actor:
    """Extract the caller from the ``Authorization: Bearer <token>`` header."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(status_code=401, detail="Access token required")

    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = auth_header[7:].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Access token required")

    try:
        return decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Access token has expired") from None
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid or expired token") from None


def require_capability(capability: Capability) -> Callable[..., Actor]:
    """Dependency factory: resolve the actor and reject roles lacking ``capability``."""

    def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if not has_capability(actor.role, capability):
            raise HTTPException(
                status_code=403, detail="Access denied: Insufficient permissions"
            )
        return actor

    return dependency
