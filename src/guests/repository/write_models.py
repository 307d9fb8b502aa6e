"""Guest and RSVP write models. Return DTOs, never ORM models.

RSVP writes are conditional: a create fails when the guest already has an
RSVP (unique ``guest_id``), an update fails when the record is gone. Both
surface as RSVPConflictError so the caller can re-read and retry.
"""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import SessionManager, async_session_manager
from src.guests.dtos import (
    RSVPDTO,
    DuplicateInvitationCodeError,
    GuestDTO,
    GuestNotFoundError,
    RSVPConflictError,
)
from src.guests.repository.orm_models import RSVP, Guest
from src.guests.repository.read_models import guest_to_dto, storage_errors

logger = logging.getLogger(__name__)


def _guest_columns(guest: GuestDTO) -> dict:
    return {
        "invitation_code": guest.invitation_code.strip().upper(),
        "primary_guest": guest.primary_guest,
        "household_members": list(guest.household_members),
        "max_party_size": guest.max_party_size,
        "email": guest.email,
        "phone": guest.phone,
        "street": guest.address.street or None,
        "city": guest.address.city or None,
        "state": guest.address.state or None,
        "zip": guest.address.zip or None,
        "country": guest.address.country or "USA",
    }


def _rsvp_columns(rsvp: RSVPDTO) -> dict:
    return {
        "attending": rsvp.attending,
        "party_size": rsvp.party_size,
        "attendees": [{"name": a.name, "meal": a.meal} for a in rsvp.attendees],
        "dietary_restrictions": list(rsvp.dietary_restrictions),
        "special_requests": rsvp.special_requests,
        "updated_at": rsvp.updated_at,
        "ip_address": rsvp.ip_address,
        "user_agent": rsvp.user_agent,
    }


class GuestWriteModel(ABC):
    @abstractmethod
    async def create_guest(self, guest: GuestDTO) -> GuestDTO:
        """Store a new guest. Raises DuplicateInvitationCodeError if the code is taken."""
        raise NotImplementedError

    @abstractmethod
    async def update_guest(self, guest: GuestDTO) -> GuestDTO:
        """Overwrite a stored guest. Raises GuestNotFoundError if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    async def delete_guest(self, guest_id: UUID) -> None:
        """Delete a guest and their RSVP. Raises GuestNotFoundError if it does not exist."""
        raise NotImplementedError


class SqlGuestWriteModel(GuestWriteModel):
    """SQL implementation of guest write operations."""

    def __init__(
        self,
        session_manager: SessionManager = async_session_manager,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.session_manager = session_manager
        self.session_overwrite = session_overwrite

    async def create_guest(self, guest: GuestDTO) -> GuestDTO:
        orm_guest = Guest(uuid=guest.id, **_guest_columns(guest))
        try:
            with storage_errors("create_guest"):
                async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                    session.add(orm_guest)
                    await session.flush()
                    await session.refresh(orm_guest)
                    return guest_to_dto(orm_guest)
        except IntegrityError as e:
            raise DuplicateInvitationCodeError(orm_guest.invitation_code) from e

    async def update_guest(self, guest: GuestDTO) -> GuestDTO:
        columns = _guest_columns(guest)
        try:
            with storage_errors("update_guest"):
                async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                    result = await session.execute(
                        update(Guest).where(Guest.uuid == guest.id).values(**columns)
                    )
                    if result.rowcount == 0:
                        raise GuestNotFoundError(str(guest.id))
                    orm_guest = await session.get(Guest, guest.id, populate_existing=True)
                    return guest_to_dto(orm_guest)
        except IntegrityError as e:
            raise DuplicateInvitationCodeError(columns["invitation_code"]) from e

    async def delete_guest(self, guest_id: UUID) -> None:
        with storage_errors("delete_guest"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                await session.execute(delete(RSVP).where(RSVP.guest_id == guest_id))
                result = await session.execute(delete(Guest).where(Guest.uuid == guest_id))
                if result.rowcount == 0:
                    raise GuestNotFoundError(str(guest_id))


class RSVPWriteModel(ABC):
    @abstractmethod
    async def create_rsvp(self, rsvp: RSVPDTO) -> RSVPDTO:
        """Store a first RSVP for a guest.

        Raises RSVPConflictError if the guest already has one.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_rsvp(self, rsvp: RSVPDTO) -> RSVPDTO:
        """Overwrite an existing RSVP, keeping its id, guest and ``submitted_at``.

        Raises RSVPConflictError if the record no longer exists.
        """
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    """SQL implementation of RSVP write operations."""

    def __init__(
        self,
        session_manager: SessionManager = async_session_manager,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.session_manager = session_manager
        self.session_overwrite = session_overwrite

    async def create_rsvp(self, rsvp: RSVPDTO) -> RSVPDTO:
        try:
            with storage_errors("create_rsvp"):
                async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                    session.add(
                        RSVP(
                            uuid=rsvp.id,
                            guest_id=rsvp.guest_id,
                            submitted_at=rsvp.submitted_at,
                            **_rsvp_columns(rsvp),
                        )
                    )
                    await session.flush()
        except IntegrityError as e:
            logger.warning("RSVP create for guest %s lost a race: %s", rsvp.guest_id, e)
            raise RSVPConflictError(rsvp.guest_id, "rsvp already exists") from e
        return rsvp

    async def update_rsvp(self, rsvp: RSVPDTO) -> RSVPDTO:
        with storage_errors("update_rsvp"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(
                    update(RSVP)
                    .where(RSVP.uuid == rsvp.id, RSVP.guest_id == rsvp.guest_id)
                    .values(**_rsvp_columns(rsvp))
                )
                if result.rowcount == 0:
                    logger.warning("RSVP update for guest %s found no record", rsvp.guest_id)
                    raise RSVPConflictError(rsvp.guest_id, "rsvp no longer exists")
        return rsvp
