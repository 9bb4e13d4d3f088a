"""Base repository with common database operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.models.orm.base import Base

T = TypeVar("T", bound=Base)

# Fragments drivers use to report unique constraint violations
# (PostgreSQL/asyncpg and SQLite respectively)
UNIQUE_VIOLATION_MARKERS = ("duplicate key", "unique constraint", "uniqueviolation")


def is_unique_violation(exc: IntegrityError) -> bool:
    """Check whether an IntegrityError comes from a unique constraint.

    Args:
        exc: IntegrityError raised by a flush

    Returns:
        True if a unique constraint was violated
    """
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return any(marker in message for marker in UNIQUE_VIOLATION_MARKERS)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations."""

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, id: UUID) -> T | None:
        """Get a record by ID.

        Args:
            id: Record UUID

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def exists(self, id: UUID) -> bool:
        """Check whether a record with this ID exists."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(self.model.id == id)
        )
        return result.scalar_one() > 0

    async def create(self, **kwargs: Any) -> T:
        """Create a new record.

        Args:
            **kwargs: Field values

        Returns:
            Created record

        Raises:
            IntegrityError: If a constraint is violated on flush
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def update(self, instance: T, **kwargs: Any) -> T:
        """Apply field values to a loaded record and flush.

        Args:
            instance: Record to update
            **kwargs: Fields to update

        Returns:
            Updated record

        Raises:
            IntegrityError: If a constraint is violated on flush
        """
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        return instance

