from collections.abc import Callable

import pytest

from src.admins.auth.config import AuthConfig, get_auth_config
from src.admins.auth.jwt_service import JWTService
from src.admins.dtos import AdminRole

ALLOWED_EMAILS = frozenset({"host@example.com", "helper@example.com"})


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(secret_key="test-secret-key-0123456789abcdef0123", allowed_emails=ALLOWED_EMAILS)


@pytest.fixture
def auth_overrides(auth_config) -> dict:
    return {get_auth_config: lambda: auth_config}


@pytest.fixture
def auth_headers(auth_config) -> Callable[..., dict]:
    """Headers carrying a valid session cookie for an admin with ``role``."""

    def factory(role: AdminRole = AdminRole.ADMIN, email: str = "host@example.com") -> dict:
        token = JWTService(auth_config).generate_token(email, "Event Host", role)
        return {"Cookie": f"{auth_config.cookie_name}={token}"}

    return factory
