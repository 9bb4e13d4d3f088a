"""Rate limiting keyed by caller.

Authenticated requests are limited per user, so callers sharing an address
(an office NAT, a reverse proxy) get separate budgets. Anonymous requests,
login included, are limited per client IP.
"""

from functools import lru_cache
from ipaddress import IPv4Network, IPv6Network, ip_address, ip_network

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from hr_api.config import get_settings
from hr_api.exceptions import UnauthenticatedError
from hr_api.security.auth import decode_token

# Proxies trusted in development when none are configured
DEVELOPMENT_PROXIES = ("127.0.0.1", "::1", "10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")


@lru_cache
def trusted_proxy_networks() -> tuple[IPv4Network | IPv6Network, ...]:
    """Parse the configured trusted proxies into networks."""
    settings = get_settings()
    proxies = settings.trusted_proxies_list
    if not proxies and settings.environment == "development":
        proxies = list(DEVELOPMENT_PROXIES)
    return tuple(ip_network(proxy, strict=False) for proxy in proxies)


def get_real_client_ip(request: Request) -> str:
    """Client IP, read from X-Forwarded-For only when sent by a trusted proxy."""
    direct_ip = get_remote_address(request)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if not forwarded_for:
        return direct_ip

    try:
        is_trusted = any(ip_address(direct_ip) in net for net in trusted_proxy_networks())
        if is_trusted:
            client_ip = forwarded_for.split(",")[0].strip()
            return str(ip_address(client_ip))
    except ValueError:
        pass
    return direct_ip


def rate_limit_key(request: Request) -> str:
    """Rate limit bucket: the token's user when it verifies, else the client IP."""
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        token = request.cookies.get(get_settings().session_cookie_name, "")

    if token:
        try:
            subject = decode_token(token).get("sub")
        except UnauthenticatedError:
            subject = None
        if subject:
            return f"user:{subject}"
    return f"ip:{get_real_client_ip(request)}"


_settings = get_settings()

AUTH_LOGIN_LIMIT = f"{_settings.rate_limit_auth_login}/minute"
API_DEFAULT_LIMIT = f"{_settings.rate_limit_default}/minute"

limiter = Limiter(
    key_func=rate_limit_key,
    default_limits=[API_DEFAULT_LIMIT],
    enabled=_settings.rate_limit_enabled,
)
