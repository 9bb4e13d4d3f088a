"""SQL injection prevention tests.

SQLAlchemy parameterizes every query the repositories build, which is the
primary protection. Request models add a second layer: telephone numbers,
emails, statuses and UUIDs are validated before they reach a service.
"""

from pathlib import Path
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from hr_api.models.domain.status import StatusFilter
from hr_api.models.domain.user import UserRole
from hr_api.models.dto.employee import EmployeeCreate
from hr_api.models.orm import EmployeeORM
from hr_api.services.employee_service import EmployeeService

SQL_INJECTION_PAYLOADS = [
    # Classic
    "'; DROP TABLE users; --",
    "1' OR '1'='1",
    "1; DELETE FROM employees WHERE '1'='1",
    "' UNION SELECT * FROM users --",
    # Blind
    "1' AND (SELECT COUNT(*) FROM users) > 0 --",
    "1'; SELECT pg_sleep(5) --",
    # Stacked queries
    "1'; UPDATE users SET role = 'ADMIN' WHERE email = 'victim@company.com'; --",
    # Encoding and comment variations
    "%27%20OR%201%3D1%20--",
    "ʼ OR 1=1 --",
    "1'/**/OR/**/1=1--",
    "$$; DROP TABLE users; $$",
    "1'\x00 OR 1=1 --",
]


def _employee_data(**overrides) -> dict:
    data = {
        "first_name": "Grace",
        "last_name": "Hopper",
        "telephone_number": "5551234567",
        "email_address": "grace@example.com",
    }
    data.update(overrides)
    return data


class TestRequestValidation:
    """Structured fields reject injection payloads before any query runs."""

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_telephone_number_rejects_payload(self, payload: str) -> None:
        with pytest.raises(ValidationError):
            EmployeeCreate(**_employee_data(telephone_number=payload))

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_email_rejects_payload(self, payload: str) -> None:
        with pytest.raises(ValidationError):
            EmployeeCreate(**_employee_data(email_address=payload))

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_status_filter_rejects_payload(self, payload: str) -> None:
        with pytest.raises(ValueError):
            StatusFilter(payload)

    @pytest.mark.parametrize("payload", ["'; DROP TABLE users; --", "1 OR 1=1", "not-a-uuid", ""])
    def test_uuid_rejects_payload(self, payload: str) -> None:
        with pytest.raises(ValueError):
            UUID(payload)

    def test_name_length_enforced(self) -> None:
        with pytest.raises(ValidationError):
            EmployeeCreate(**_employee_data(first_name="A" * 101))


class TestNoRawSQL:
    """Repositories build queries with the SQL expression language only."""

    def test_no_text_calls_in_repositories(self) -> None:
        repo_dir = Path(__file__).parent.parent / "src" / "hr_api" / "repositories"
        assert repo_dir.is_dir()

        for path in repo_dir.glob("*.py"):
            for lineno, line in enumerate(path.read_text().splitlines(), 1):
                stripped = line.strip()
                if stripped.startswith("#"):
                    continue
                if ".execute(text(" in line or "= text(" in line:
                    pytest.fail(f"Raw SQL in {path.name}:{lineno}: {stripped}")


class TestSQLAlchemyProtection:
    """Values end up as bound parameters, never in the SQL text."""

    def test_filter_value_is_bound(self) -> None:
        malicious = "'; DROP TABLE employees; --"
        query = select(EmployeeORM).where(EmployeeORM.email_address == malicious)

        compiled = query.compile(dialect=postgresql.dialect())

        assert malicious not in str(compiled)
        assert malicious in compiled.params.values()

    async def test_payload_stored_verbatim(self, db_session, seed) -> None:
        """Free-text fields accept the payload and store it as plain data."""
        admin = await seed.employee("Ada", role=UserRole.ADMIN)
        caller = await seed.caller_for(admin)
        payload = "Robert'); DROP TABLE employees; --"
        data = _employee_data(last_name=payload, email_address=f"{uuid4().hex}@example.com")

        created = await EmployeeService(db_session).create_employee(caller, EmployeeCreate(**data))
        await db_session.commit()

        stored = await db_session.get(EmployeeORM, created.id)
        assert stored is not None
        assert stored.last_name == payload
        assert await seed.count(EmployeeORM) == 2
