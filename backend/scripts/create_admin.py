#!/usr/bin/env python
"""Create an admin user, or promote the user of an existing employee to admin.

This is the only way a user gets the ADMIN role.
"""

import asyncio
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.database import async_session_maker, engine
from hr_api.models.domain.user import UserRole
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.repositories.user_repository import UserRepository
from hr_api.security.password import get_password_service


async def create_admin(
    session: AsyncSession,
    email: str,
    password: str,
    name: str | None = None,
) -> bool:
    """Create or promote an admin user.

    If a user with this email exists it is promoted to ADMIN. Otherwise a
    new user is created, linked to the employee with the same email if one
    exists.

    Returns:
        True if an admin was created or promoted
    """
    password_service = get_password_service()
    user_repo = UserRepository(session)

    existing = await user_repo.get_by_email(email)
    if existing is not None:
        if existing.role == UserRole.ADMIN:
            print(f"User {email} is already an admin")
            return False
        await user_repo.set_role(existing, UserRole.ADMIN)
        await session.commit()
        print(f"User {email} promoted to admin")
        return True

    is_valid, errors = password_service.validate_password_strength(password)
    if not is_valid:
        print(f"Password validation failed: {errors}")
        return False

    employee = await EmployeeRepository(session).get_by_email(email)
    await user_repo.create(
        email=email.lower(),
        password_hash=password_service.hash_password(password),
        name=name or (employee.full_name if employee else None),
        role=UserRole.ADMIN,
        employee_id=employee.id if employee else None,
    )
    await session.commit()
    print(f"Admin user created: {email}")
    return True


async def main(email: str, password: str, name: str | None) -> bool:
    try:
        async with async_session_maker() as session:
            return await create_admin(session, email, password, name)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--password", required=True, help="Password (min 12 chars)")
    parser.add_argument("--name", help="Display name")
    args = parser.parse_args()

    sys.exit(0 if asyncio.run(main(args.email, args.password, args.name)) else 1)
