"""Write model for admin login.

Every rejected attempt raises InvalidCredentialsError with a reason for the
logs. Callers must not show that reason to the client.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime

from src.admins.auth.config import AuthConfig
from src.admins.auth.jwt_service import JWTService
from src.admins.auth.passwords import verify_password
from src.admins.dtos import AdminNotFoundError, AdminSessionDTO, InvalidCredentialsError
from src.admins.repository.read_models import AdminReadModel
from src.admins.repository.write_models import AdminWriteModel
from src.guests.dtos import StorageUnavailableError

logger = logging.getLogger(__name__)


class AdminLoginWriteModel(ABC):
    @abstractmethod
    async def login(self, email: str, password: str) -> AdminSessionDTO:
        raise NotImplementedError


class RepositoryAdminLoginWriteModel(AdminLoginWriteModel):
    def __init__(
        self,
        config: AuthConfig,
        jwt_service: JWTService,
        read_model: AdminReadModel,
        write_model: AdminWriteModel,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.config = config
        self.jwt_service = jwt_service
        self.read_model = read_model
        self.write_model = write_model
        self.clock = clock

    async def login(self, email: str, password: str) -> AdminSessionDTO:
        email = (email or "").strip().lower()
        if not email or not password:
            raise InvalidCredentialsError("email and password are required")

        # Checked before touching storage so unknown addresses cost nothing
        if not self.config.is_allowed_email(email):
            logger.warning("Admin login rejected for %s: email not allowed", email)
            raise InvalidCredentialsError("email not allowed")

        credentials = await self.read_model.get_admin_by_email(email)
        if credentials is None:
            logger.warning("Admin login failed for %s: user not found", email)
            raise InvalidCredentialsError("user not found")

        if not verify_password(password, credentials.password_hash):
            logger.warning("Admin login failed for %s: invalid password", email)
            raise InvalidCredentialsError("invalid password")

        admin = credentials.admin
        token = self.jwt_service.generate_token(admin.email, admin.name, admin.role)

        try:
            await self.write_model.update_last_login(admin.email, self.clock())
        except (AdminNotFoundError, StorageUnavailableError) as e:
            logger.warning("Failed to update last login for %s: %s", admin.email, e)

        logger.info("Admin login successful for %s", admin.email)
        return AdminSessionDTO(admin=admin, token=token)
