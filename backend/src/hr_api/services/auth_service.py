"""Authentication service: password login."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.config import get_settings
from hr_api.exceptions import UnauthenticatedError
from hr_api.models.domain.user import Caller
from hr_api.models.dto.auth import TokenResponse
from hr_api.repositories.user_repository import UserRepository
from hr_api.security.auth import create_access_token
from hr_api.security.password import get_password_service

logger = logging.getLogger(__name__)


class AuthService:
    """Service for logging users in."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.password_service = get_password_service()

    async def authenticate(self, email: str, password: str) -> tuple[Caller, TokenResponse]:
        """Authenticate with email and password.

        Args:
            email: User email
            password: User password

        Returns:
            Tuple of (authenticated caller, access token)

        Raises:
            UnauthenticatedError: If the credentials do not match a user
        """
        user = await self.user_repo.get_by_email(email)

        if user is None or not self.password_service.verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise UnauthenticatedError("Invalid credentials")

        logger.info("User %s logged in", user.id)
        settings = get_settings()
        token = TokenResponse(
            access_token=create_access_token(user.id),
            expires_in=settings.jwt_expiration_hours * 3600,
        )
        caller = Caller(
            user_id=user.id,
            role=user.role,
            employee_id=user.employee_id,
            email=user.email,
            name=user.name,
        )
        return caller, token
