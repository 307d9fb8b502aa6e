from abc import ABC, abstractmethod
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.admins.dtos import AdminAlreadyExistsError, AdminDTO, AdminNotFoundError, AdminRole
from src.admins.repository.read_models import admin_to_dto
from src.config.database import SessionManager, async_session_manager
from src.guests.repository.read_models import storage_errors
from src.models.admin import AdminUser


class AdminWriteModel(ABC):
    @abstractmethod
    async def create_admin(
        self, email: str, name: str, role: AdminRole, password_hash: str
    ) -> AdminDTO:
        """Store a new admin. Raises AdminAlreadyExistsError if the e-mail is taken."""
        raise NotImplementedError

    @abstractmethod
    async def update_last_login(self, email: str, logged_in_at: datetime) -> None:
        """Raises AdminNotFoundError if there is no such admin."""
        raise NotImplementedError


class SqlAdminWriteModel(AdminWriteModel):
    """SQL implementation of admin write operations."""

    def __init__(
        self,
        session_manager: SessionManager = async_session_manager,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.session_manager = session_manager
        self.session_overwrite = session_overwrite

    async def create_admin(
        self, email: str, name: str, role: AdminRole, password_hash: str
    ) -> AdminDTO:
        email = email.strip().lower()
        admin = AdminUser(email=email, name=name, role=role, password_hash=password_hash)
        try:
            with storage_errors("create_admin"):
                async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                    session.add(admin)
                    await session.flush()
                    await session.refresh(admin)
                    return admin_to_dto(admin)
        except IntegrityError as e:
            raise AdminAlreadyExistsError(email) from e

    async def update_last_login(self, email: str, logged_in_at: datetime) -> None:
        email = email.strip().lower()
        with storage_errors("update_last_login"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(
                    update(AdminUser).where(AdminUser.email == email).values(last_login=logged_in_at)
                )
                if result.rowcount == 0:
                    raise AdminNotFoundError(email)
