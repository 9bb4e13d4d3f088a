"""Rate limit key tests: per-user buckets with an IP fallback."""

from uuid import uuid4

from starlette.requests import Request

from hr_api.config import get_settings
from hr_api.security.auth import create_access_token
from hr_api.security.rate_limit import get_real_client_ip, rate_limit_key


def make_request(client_ip: str = "203.0.113.7", headers: dict[str, str] | None = None) -> Request:
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "headers": raw_headers,
            "client": (client_ip, 50000),
        }
    )


class TestRateLimitKey:
    """Bucket selection."""

    def test_bearer_token_keys_by_user(self) -> None:
        user_id = uuid4()
        request = make_request(headers={"Authorization": f"Bearer {create_access_token(user_id)}"})

        assert rate_limit_key(request) == f"user:{user_id}"

    def test_session_cookie_keys_by_user(self) -> None:
        user_id = uuid4()
        cookie = f"{get_settings().session_cookie_name}={create_access_token(user_id)}"

        assert rate_limit_key(make_request(headers={"Cookie": cookie})) == f"user:{user_id}"

    def test_invalid_token_falls_back_to_ip(self) -> None:
        request = make_request(headers={"Authorization": "Bearer not-a-jwt"})

        assert rate_limit_key(request) == "ip:203.0.113.7"

    def test_anonymous_keys_by_ip(self) -> None:
        assert rate_limit_key(make_request()) == "ip:203.0.113.7"


class TestRealClientIp:
    """X-Forwarded-For handling."""

    def test_forwarded_for_honoured_from_trusted_proxy(self) -> None:
        request = make_request("10.0.0.5", {"X-Forwarded-For": "198.51.100.9, 10.0.0.5"})

        assert get_real_client_ip(request) == "198.51.100.9"

    def test_forwarded_for_ignored_from_untrusted_client(self) -> None:
        request = make_request("203.0.113.7", {"X-Forwarded-For": "198.51.100.9"})

        assert get_real_client_ip(request) == "203.0.113.7"

    def test_malformed_forwarded_for_ignored(self) -> None:
        request = make_request("10.0.0.5", {"X-Forwarded-For": "not-an-ip"})

        assert get_real_client_ip(request) == "10.0.0.5"
