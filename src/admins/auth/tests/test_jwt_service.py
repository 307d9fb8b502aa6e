from dataclasses import replace
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from src.admins.auth.jwt_service import JWTService
from src.admins.dtos import AdminRole, InvalidCredentialsError


def test_token_round_trip(auth_config):
    service = JWTService(auth_config)

    claims = service.validate_token(service.generate_token("host@example.com", "Host", "viewer"))

    assert claims.email == "host@example.com"
    assert claims.name == "Host"
    assert claims.role == AdminRole.VIEWER
    assert claims.expires_at > datetime.now(UTC) + timedelta(hours=23)


def test_token_signed_with_another_key_is_rejected(auth_config):
    token = JWTService(replace(auth_config, secret_key="another-secret-key-0123456789abcdef")).generate_token(
        "host@example.com", "Host", AdminRole.ADMIN
    )

    with pytest.raises(InvalidCredentialsError):
        JWTService(auth_config).validate_token(token)


def test_expired_token_is_rejected(auth_config):
    token = JWTService(replace(auth_config, token_lifetime_minutes=-5)).generate_token(
        "host@example.com", "Host", AdminRole.ADMIN
    )

    with pytest.raises(InvalidCredentialsError):
        JWTService(auth_config).validate_token(token)


def test_token_from_another_issuer_is_rejected(auth_config):
    token = JWTService(replace(auth_config, issuer="someone-else")).generate_token(
        "host@example.com", "Host", AdminRole.ADMIN
    )

    with pytest.raises(InvalidCredentialsError):
        JWTService(auth_config).validate_token(token)


def test_unknown_role_is_rejected(auth_config):
    now = datetime.now(UTC)
    token = jwt.encode(
        {
            "email": "host@example.com",
            "role": "owner",
            "iss": auth_config.issuer,
            "exp": now + timedelta(minutes=5),
        },
        auth_config.secret_key,
        algorithm=auth_config.algorithm,
    )

    with pytest.raises(InvalidCredentialsError):
        JWTService(auth_config).validate_token(token)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_garbage_is_rejected(auth_config, token):
    with pytest.raises(InvalidCredentialsError):
        JWTService(auth_config).validate_token(token)
