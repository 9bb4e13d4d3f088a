"""Authentication DTOs."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from hr_api.models.domain.user import UserRole


class LoginRequest(BaseModel):
    """Login request."""

    email: EmailStr = Field(description="Please enter a valid email")
    password: str = Field(min_length=1, max_length=256, description="Password is required")


class TokenResponse(BaseModel):
    """Access token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class CallerInfo(BaseModel):
    """The authenticated caller."""

    user_id: UUID
    email: str | None = None
    name: str | None = None
    role: UserRole
    employee_id: UUID | None = None
