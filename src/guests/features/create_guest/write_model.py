"""Write model for creating guests.

Assigns a fresh invitation code and stores the household. Returns DTOs
instead of ORM models.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from uuid import uuid4

from src.guests.dtos import AddressDTO, DuplicateInvitationCodeError, GuestDTO
from src.guests.invite import generate_invitation_code, normalize_invitation_code
from src.guests.repository.write_models import GuestWriteModel, SqlGuestWriteModel

logger = logging.getLogger(__name__)


class GuestCreateWriteModel(ABC):
    """Abstract base class for guest creation write operations."""

    @abstractmethod
    async def create_guest(
        self,
        primary_guest: str,
        household_members: list[str] | None = None,
        max_party_size: int = 1,
        email: str | None = None,
        phone: str | None = None,
        address: AddressDTO | None = None,
        invitation_code: str | None = None,
    ) -> GuestDTO:
        """Create a new guest. Returns DTO.

        Args:
            primary_guest: Name the invitation is addressed to
            household_members: Other people on the invitation
            max_party_size: Most people the household may bring
            email: Optional contact email
            phone: Optional contact phone
            address: Optional mailing address
            invitation_code: Use this code instead of generating one
        """
        raise NotImplementedError


class SqlGuestCreateWriteModel(GuestCreateWriteModel):
    """Creates guests through a guest write model, retrying code collisions."""

    max_code_attempts = 3

    def __init__(
        self,
        guest_write_model: GuestWriteModel | None = None,
        code_generator: Callable[[], str] = generate_invitation_code,
    ) -> None:
        self.guest_write_model = guest_write_model or SqlGuestWriteModel()
        self.code_generator = code_generator

    async def create_guest(
        self,
        primary_guest: str,
        household_members: list[str] | None = None,
        max_party_size: int = 1,
        email: str | None = None,
        phone: str | None = None,
        address: AddressDTO | None = None,
        invitation_code: str | None = None,
    ) -> GuestDTO:
        primary_guest = (primary_guest or "").strip()
        if not primary_guest:
            raise ValueError("Primary guest name is required")
        if max_party_size < 1:
            raise ValueError("Max party size must be at least 1")

        guest = GuestDTO(
            id=uuid4(),
            invitation_code="",
            primary_guest=primary_guest,
            household_members=list(household_members or []),
            max_party_size=max_party_size,
            email=(email or "").strip() or None,
            phone=(phone or "").strip() or None,
            address=address or AddressDTO(),
        )

        # A caller-supplied code is used as is, so a collision is final
        if invitation_code:
            code = normalize_invitation_code(invitation_code)
            return await self._store(guest, code)

        for _ in range(self.max_code_attempts - 1):
            code = self.code_generator()
            try:
                return await self._store(guest, code)
            except DuplicateInvitationCodeError:
                logger.warning("Invitation code %s already taken, generating another", code)
        return await self._store(guest, self.code_generator())

    async def _store(self, guest: GuestDTO, code: str) -> GuestDTO:
        created = await self.guest_write_model.create_guest(replace(guest, invitation_code=code))
        logger.info("Created guest %s with code %s", created.primary_guest, created.invitation_code)
        return created
