"""JWT token issuing and verification for the Jobly API.

Tokens are HS256-signed with `SECURITY_SECRET_KEY` and carry a `username`
and an `isAdmin` claim. Reads are public; writes require an admin token.
"""

from typing import Annotated, Any

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.errors import UnauthorizedError

logger = structlog.get_logger(__name__)

_optional_security = HTTPBearer(auto_error=False)


class AuthenticatedUser(BaseModel):
    """Authenticated user information."""

    username: str
    is_admin: bool = False


def create_token(username: str, is_admin: bool = False) -> str:
    """Sign a token for `username`."""
    settings = get_settings()
    payload: dict[str, Any] = {"username": username, "isAdmin": is_admin}
    return jwt.encode(
        payload,
        settings.security.secret_key.get_secret_value(),
        algorithm=settings.security.jwt_algorithm,
    )


def verify_token(token: str) -> AuthenticatedUser:
    """Decode a token.

    Raises:
        UnauthorizedError: If the signature or payload is invalid
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.security.secret_key.get_secret_value(),
            algorithms=[settings.security.jwt_algorithm],
        )
    except JWTError as e:
        raise UnauthorizedError("Invalid token") from e

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        raise UnauthorizedError("Invalid token")
    return AuthenticatedUser(username=username, is_admin=payload.get("isAdmin") is True)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_optional_security),
) -> AuthenticatedUser | None:
    """Return the caller if a valid bearer token was sent, else None."""
    if credentials is None:
        return None
    try:
        return verify_token(credentials.credentials)
    except UnauthorizedError:
        logger.info("Ignoring invalid bearer token")
        return None


def require_admin(
    user: AuthenticatedUser | None = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency that only lets admins through."""
    if user is None or not user.is_admin:
        logger.warning(
            "Access denied - admin required",
            username=user.username if user else None,
        )
        raise UnauthorizedError("Unauthorized")
    return user


CurrentUser = Annotated[AuthenticatedUser | None, Depends(get_current_user)]
RequireAdmin = Annotated[AuthenticatedUser, Depends(require_admin)]
