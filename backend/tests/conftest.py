"""Shared fixtures: in-memory database, seed helpers and an API client."""

import os

# Settings are cached on first use, so the environment is set before any import
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event, func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from hr_api.database import get_db  # noqa: E402
from hr_api.models.domain.status import RecordStatus  # noqa: E402
from hr_api.models.domain.user import Caller, UserRole  # noqa: E402
from hr_api.models.orm import (  # noqa: E402
    Base,
    DepartmentMembershipORM,
    DepartmentORM,
    EmployeeORM,
    UserORM,
)
from hr_api.repositories.user_repository import UserRepository  # noqa: E402
from hr_api.security.auth import create_access_token  # noqa: E402
from hr_api.security.password import get_password_service  # noqa: E402

TEST_PASSWORD = "Sup3r-Secret#Pass"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


class Seeder:
    """Writes committed fixture rows straight through the ORM."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._counter = 0

    async def employee(
        self,
        first_name: str,
        last_name: str = "Tester",
        *,
        manager: EmployeeORM | None = None,
        role: UserRole | None = UserRole.EMPLOYEE,
        status: RecordStatus = RecordStatus.ACTIVE,
        email: str | None = None,
    ) -> EmployeeORM:
        """Create an employee and, unless ``role`` is None, their user."""
        self._counter += 1
        email = email or f"{first_name.lower()}.{self._counter}@example.com"
        employee = EmployeeORM(
            first_name=first_name,
            last_name=last_name,
            telephone_number=f"555000{self._counter:04d}",
            email_address=email,
            status=status,
            manager_id=manager.id if manager else None,
        )
        self.session.add(employee)
        await self.session.flush()
        if role is not None:
            self.session.add(
                UserORM(
                    email=email,
                    password_hash=get_password_service().hash_password(TEST_PASSWORD),
                    name=f"{first_name} {last_name}",
                    role=role,
                    employee_id=employee.id,
                )
            )
        await self.session.commit()
        return employee

    async def department(
        self,
        name: str,
        manager: EmployeeORM,
        members: list[EmployeeORM] | None = None,
        status: RecordStatus = RecordStatus.ACTIVE,
    ) -> DepartmentORM:
        """Create a department with optional members."""
        department = DepartmentORM(name=name, manager_id=manager.id, status=status)
        self.session.add(department)
        await self.session.flush()
        for member in members or []:
            self.session.add(
                DepartmentMembershipORM(department_id=department.id, employee_id=member.id)
            )
        await self.session.commit()
        return department

    async def user_of(self, employee: EmployeeORM) -> UserORM:
        """Get the user linked to an employee."""
        user = await UserRepository(self.session).get_by_employee_id(employee.id)
        assert user is not None
        return user

    async def caller_for(self, employee: EmployeeORM) -> Caller:
        """Build the caller identity of an employee's user."""
        user = await self.user_of(employee)
        return Caller(
            user_id=user.id,
            role=user.role,
            employee_id=employee.id,
            email=user.email,
            name=user.name,
        )

    async def headers_for(self, employee: EmployeeORM) -> dict[str, str]:
        """Bearer headers for an employee's user."""
        user = await self.user_of(employee)
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    async def role_of(self, employee_id: UUID) -> UserRole | None:
        """Read a user's role straight from the database."""
        result = await self.session.execute(
            select(UserORM.role).where(UserORM.employee_id == employee_id)
        )
        return result.scalar_one_or_none()

    async def count(self, model: type[Base]) -> int:
        """Count the committed rows of a table."""
        result = await self.session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


@pytest_asyncio.fixture
async def seed(db_session: AsyncSession) -> Seeder:
    return Seeder(db_session)


@pytest_asyncio.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, with the test database injected."""
    from hr_api.main import create_app

    app = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

