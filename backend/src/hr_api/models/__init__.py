"""Models package: ORM tables, domain models and DTOs."""
