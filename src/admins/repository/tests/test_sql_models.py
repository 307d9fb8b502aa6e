"""Tests for the SQL admin read and write models against sqlite."""

from datetime import UTC, datetime

import pytest

from src.admins.dtos import AdminAlreadyExistsError, AdminNotFoundError, AdminRole
from src.admins.repository.read_models import SqlAdminReadModel
from src.admins.repository.write_models import SqlAdminWriteModel


@pytest.fixture
def read_model(session_manager):
    return SqlAdminReadModel(session_manager=session_manager)


@pytest.fixture
def write_model(session_manager):
    return SqlAdminWriteModel(session_manager=session_manager)


@pytest.mark.asyncio
async def test_create_and_get_admin(read_model, write_model):
    admin = await write_model.create_admin(
        " Host@Example.com ", "Event Host", AdminRole.VIEWER, "hashed"
    )

    assert admin.email == "host@example.com"
    assert admin.role == AdminRole.VIEWER

    credentials = await read_model.get_admin_by_email("HOST@example.com")
    assert credentials.admin.id == admin.id
    assert credentials.password_hash == "hashed"
    assert credentials.admin.last_login is None


@pytest.mark.asyncio
async def test_get_unknown_admin(read_model):
    assert await read_model.get_admin_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_create_duplicate_admin(write_model):
    await write_model.create_admin("host@example.com", "Event Host", AdminRole.ADMIN, "hashed")

    with pytest.raises(AdminAlreadyExistsError):
        await write_model.create_admin("host@example.com", "Other", AdminRole.VIEWER, "hashed")


@pytest.mark.asyncio
async def test_update_last_login(read_model, write_model):
    await write_model.create_admin("host@example.com", "Event Host", AdminRole.ADMIN, "hashed")
    logged_in_at = datetime(2026, 6, 1, 9, 30, tzinfo=UTC)

    await write_model.update_last_login("host@example.com", logged_in_at)

    credentials = await read_model.get_admin_by_email("host@example.com")
    assert credentials.admin.last_login == logged_in_at


@pytest.mark.asyncio
async def test_update_last_login_unknown_admin(write_model):
    with pytest.raises(AdminNotFoundError):
        await write_model.update_last_login("nobody@example.com", datetime.now(UTC))
