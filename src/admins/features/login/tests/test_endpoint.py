import pytest

from src.admins.auth.jwt_service import JWTService
from src.admins.dtos import AdminRole
from src.admins.features.login.router import get_login_write_model
from src.admins.features.login.write_model import RepositoryAdminLoginWriteModel
from src.admins.repository.tests.inmemory_models import InMemoryAdminModel, make_admin_credentials
from src.admins.urls import LOGIN_URL, LOGOUT_URL, ME_URL
from src.guests.dtos import StorageUnavailableError


class UnavailableAdminModel(InMemoryAdminModel):
    async def get_admin_by_email(self, email):
        raise StorageUnavailableError("database is down")


@pytest.fixture
def login_overrides(auth_config, auth_overrides):
    def factory(admin_model):
        write_model = RepositoryAdminLoginWriteModel(
            config=auth_config,
            jwt_service=JWTService(auth_config),
            read_model=admin_model,
            write_model=admin_model,
        )
        return {**auth_overrides, get_login_write_model: lambda: write_model}

    return factory


@pytest.fixture
def admin_model():
    return InMemoryAdminModel([make_admin_credentials("host@example.com", "correct-horse")])


@pytest.mark.asyncio
async def test_login_sets_session_cookie(client_factory, login_overrides, admin_model):
    async with client_factory(login_overrides(admin_model)) as client:
        response = await client.post(
            LOGIN_URL, json={"email": "host@example.com", "password": "correct-horse"}
        )

    assert response.status_code == 200
    assert response.json() == {"email": "host@example.com", "name": "Event Host", "role": "admin"}
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("admin_token=")
    assert "httponly" in cookie.lower()
    assert "samesite=strict" in cookie.lower()
    assert "max-age=86400" in cookie.lower()
    assert "secure" not in cookie.lower()


@pytest.mark.asyncio
async def test_login_cookie_is_secure_behind_https_proxy(
    client_factory, login_overrides, admin_model
):
    async with client_factory(login_overrides(admin_model)) as client:
        response = await client.post(
            LOGIN_URL,
            json={"email": "host@example.com", "password": "correct-horse"},
            headers={"X-Forwarded-Proto": "https"},
        )

    assert response.status_code == 200
    assert "secure" in response.headers["set-cookie"].lower()


@pytest.mark.parametrize(
    "credentials",
    [
        {"email": "host@example.com", "password": "battery-staple"},
        {"email": "intruder@example.com", "password": "correct-horse"},
        {"email": "", "password": ""},
    ],
)
@pytest.mark.asyncio
async def test_login_failures_look_the_same(
    client_factory, login_overrides, admin_model, credentials
):
    async with client_factory(login_overrides(admin_model)) as client:
        response = await client.post(LOGIN_URL, json=credentials)

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_login_storage_unavailable(client_factory, login_overrides):
    async with client_factory(login_overrides(UnavailableAdminModel())) as client:
        response = await client.post(
            LOGIN_URL, json={"email": "host@example.com", "password": "correct-horse"}
        )

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_me(client_factory, auth_overrides, auth_headers):
    async with client_factory(auth_overrides) as client:
        response = await client.get(ME_URL, headers=auth_headers(AdminRole.VIEWER))

    assert response.status_code == 200
    assert response.json() == {"email": "host@example.com", "name": "Event Host", "role": "viewer"}


@pytest.mark.parametrize("headers", [{}, {"Cookie": "admin_token=forged"}])
@pytest.mark.asyncio
async def test_me_requires_a_valid_session(client_factory, auth_overrides, headers):
    async with client_factory(auth_overrides) as client:
        response = await client.get(ME_URL, headers=headers)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_cookie(client_factory, auth_overrides):
    async with client_factory(auth_overrides) as client:
        response = await client.post(LOGOUT_URL)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    cookie = response.headers["set-cookie"].lower()
    assert cookie.startswith("admin_token=")
    assert "max-age=0" in cookie
