"""Authentication router - email and password login."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from hr_api.config import get_settings
from hr_api.dependencies import get_auth_service
from hr_api.models.dto.auth import CallerInfo, LoginRequest, TokenResponse
from hr_api.security.auth import CurrentCaller
from hr_api.security.rate_limit import API_DEFAULT_LIMIT, AUTH_LOGIN_LIMIT, limiter
from hr_api.services.auth_service import AuthService

router = APIRouter()


def _cookie_is_secure() -> bool:
    settings = get_settings()
    return settings.session_cookie_secure and settings.environment != "development"


def _set_session_cookie(response: Response, access_token: str) -> None:
    """Set the session cookie carrying the access token."""
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=access_token,
        httponly=settings.session_cookie_httponly,
        secure=_cookie_is_secure(),
        samesite=settings.session_cookie_samesite,
        max_age=settings.jwt_expiration_hours * 3600,
        path="/",
    )


def _clear_session_cookie(response: Response) -> None:
    """Clear the session cookie."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=_cookie_is_secure(),
        samesite=settings.session_cookie_samesite,
        httponly=settings.session_cookie_httponly,
    )


@router.post("/login", response_model=TokenResponse)
@limiter.limit(AUTH_LOGIN_LIMIT)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Login with email and password."""
    _, token = await auth_service.authenticate(body.email, body.password)
    _set_session_cookie(response, token.access_token)
    return token


@router.post("/logout")
@limiter.limit(API_DEFAULT_LIMIT)
async def logout(request: Request, response: Response) -> dict[str, str]:
    """Logout by clearing the session cookie."""
    _clear_session_cookie(response)
    return {"message": "Logout successful"}


@router.get("/me", response_model=CallerInfo)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_current_caller_info(
    request: Request,
    caller: CurrentCaller,
) -> CallerInfo:
    """Get the authenticated caller."""
    return CallerInfo.model_validate(caller.model_dump())
