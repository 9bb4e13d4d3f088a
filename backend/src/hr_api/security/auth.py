"""Authentication: JWT access tokens and caller resolution."""

from datetime import datetime, timedelta, timezone
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.config import get_settings
from hr_api.database import get_db
from hr_api.exceptions import UnauthenticatedError
from hr_api.models.domain.user import Caller
from hr_api.repositories.user_repository import UserRepository


def create_access_token(user_id: UUID) -> str:
    """Create a JWT access token.

    The token carries no role; the role is reloaded from the user row on
    every request.

    Args:
        user_id: User UUID

    Returns:
        JWT token string
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id),
        "iss": settings.jwt_issuer,
        "exp": now + timedelta(hours=settings.jwt_expiration_hours),
        "iat": now,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Args:
        token: JWT token string

    Returns:
        Token payload

    Raises:
        UnauthenticatedError: If token is invalid or expired
    """
    settings = get_settings()

    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except JWTError as e:
        raise UnauthenticatedError("Invalid or expired token") from e


async def get_current_caller(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(HTTPBearer(auto_error=False))] = None,
) -> Caller:
    """Resolve the calling identity from the bearer token or session cookie.

    Args:
        request: Incoming request (for the session cookie)
        db: Request database session
        credentials: HTTP Bearer credentials, if sent

    Returns:
        Caller with the user's current role

    Raises:
        UnauthenticatedError: If no valid token is presented or the user is gone
    """
    settings = get_settings()
    token = credentials.credentials if credentials else request.cookies.get(settings.session_cookie_name)
    if not token:
        raise UnauthenticatedError()

    payload = decode_token(token)
    try:
        user_id = UUID(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise UnauthenticatedError("Invalid or expired token") from e

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise UnauthenticatedError()

    return Caller(
        user_id=user.id,
        role=user.role,
        employee_id=user.employee_id,
        email=user.email,
        name=user.name,
    )


CurrentCaller = Annotated[Caller, Depends(get_current_caller)]
