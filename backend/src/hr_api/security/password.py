"""Password hashing and validation utilities."""

import re
from functools import lru_cache

import bcrypt

from hr_api.config import get_settings


class PasswordService:
    """Service for password hashing and validation."""

    MIN_LENGTH = 12
    SPECIAL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

    def __init__(self, rounds: int = 12) -> None:
        """Initialize service with the bcrypt work factor."""
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password
            hashed: Hashed password

        Returns:
            True if password matches
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, UnicodeDecodeError, UnicodeEncodeError):
            # Invalid hash format or encoding issues
            return False

    def validate_password_strength(self, password: str) -> tuple[bool, list[str]]:
        """Validate password meets complexity requirements.

        Used for accounts created by hand (the admin seeding script); the
        default employee password is set by configuration.

        Args:
            password: Password to validate

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = []

        if len(password) < self.MIN_LENGTH:
            errors.append(f"Password must be at least {self.MIN_LENGTH} characters")

        if not re.search(r"[A-Z]", password):
            errors.append("Password must contain at least one uppercase letter")

        if not re.search(r"[a-z]", password):
            errors.append("Password must contain at least one lowercase letter")

        if not re.search(r"\d", password):
            errors.append("Password must contain at least one digit")

        if not any(c in self.SPECIAL_CHARS for c in password):
            errors.append(
                f"Password must contain at least one special character ({self.SPECIAL_CHARS})"
            )

        return len(errors) == 0, errors


@lru_cache
def get_password_service() -> PasswordService:
    """Get the shared password service."""
    return PasswordService(rounds=get_settings().bcrypt_rounds)
