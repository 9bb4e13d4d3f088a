"""Record status domain model."""

from enum import StrEnum


class RecordStatus(StrEnum):
    """Lifecycle status shared by employees and departments.

    Deactivation is reversible; there is no terminal state.
    """

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class StatusFilter(StrEnum):
    """Status filter accepted by list queries."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ALL = "ALL"

    def as_status(self) -> RecordStatus | None:
        """Return the status to filter on, or None for no filtering."""
        if self is StatusFilter.ALL:
            return None
        return RecordStatus(self.value)
