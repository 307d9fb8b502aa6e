import abc

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.admins.dtos import AdminCredentialsDTO, AdminDTO, AdminRole
from src.config.database import SessionManager, async_session_manager
from src.guests.repository.read_models import ensure_utc, storage_errors
from src.models.admin import AdminUser


def admin_to_dto(admin: AdminUser) -> AdminDTO:
    return AdminDTO(
        id=admin.uuid,
        email=admin.email,
        name=admin.name,
        role=AdminRole(admin.role),
        created_at=ensure_utc(admin.created_at),
        updated_at=ensure_utc(admin.updated_at),
        last_login=ensure_utc(admin.last_login),
    )


class AdminReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_admin_by_email(self, email: str) -> AdminCredentialsDTO | None:
        """Look up an admin and their password hash. E-mails are compared lower-cased."""
        raise NotImplementedError


class SqlAdminReadModel(AdminReadModel):
    """SQL implementation of the admin read model."""

    def __init__(
        self,
        session_manager: SessionManager = async_session_manager,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.session_manager = session_manager
        self.session_overwrite = session_overwrite

    async def get_admin_by_email(self, email: str) -> AdminCredentialsDTO | None:
        email = (email or "").strip().lower()
        with storage_errors("get_admin_by_email"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(select(AdminUser).where(AdminUser.email == email))
                admin = result.scalar_one_or_none()
                if not admin:
                    return None
                return AdminCredentialsDTO(admin=admin_to_dto(admin), password_hash=admin.password_hash)
