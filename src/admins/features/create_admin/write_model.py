"""Write model for provisioning admin accounts."""

import logging
from abc import ABC, abstractmethod

from src.admins.auth.config import AuthConfig
from src.admins.auth.passwords import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH, hash_password
from src.admins.dtos import AdminAlreadyExistsError, AdminDTO, AdminProvisioningError, AdminRole
from src.admins.repository.read_models import AdminReadModel
from src.admins.repository.write_models import AdminWriteModel

logger = logging.getLogger(__name__)


class CreateAdminWriteModel(ABC):
    @abstractmethod
    async def create_admin(self, email: str, name: str, role: str, password: str) -> AdminDTO:
        """Create an admin account.

        Raises:
            AdminProvisioningError: e-mail not allowed, bad role, name or password
            AdminAlreadyExistsError: an admin with that e-mail exists
        """
        raise NotImplementedError


class RepositoryCreateAdminWriteModel(CreateAdminWriteModel):
    def __init__(
        self,
        config: AuthConfig,
        read_model: AdminReadModel,
        write_model: AdminWriteModel,
    ) -> None:
        self.config = config
        self.read_model = read_model
        self.write_model = write_model

    async def create_admin(self, email: str, name: str, role: str, password: str) -> AdminDTO:
        email = (email or "").strip().lower()
        name = (name or "").strip()
        if not email or not name:
            raise AdminProvisioningError("Email and name are required")

        try:
            admin_role = AdminRole((role or "").strip().lower())
        except ValueError:
            raise AdminProvisioningError(f"Invalid role: {role} (must be 'admin' or 'viewer')") from None

        if not self.config.is_allowed_email(email):
            raise AdminProvisioningError(f"Email {email} is not on the admin allow-list")

        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AdminProvisioningError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise AdminProvisioningError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        if await self.read_model.get_admin_by_email(email) is not None:
            raise AdminAlreadyExistsError(email)

        admin = await self.write_model.create_admin(
            email=email, name=name, role=admin_role, password_hash=hash_password(password)
        )
        logger.info("Created %s account for %s", admin.role.value, admin.email)
        return admin
