"""Guest and RSVP read models. They return DTOs, never ORM models."""

import abc
import contextlib
import logging
from collections.abc import Iterator
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import SessionManager, async_session_manager
from src.guests.dtos import AddressDTO, AttendeeDTO, GuestDTO, RSVPDTO, StorageUnavailableError
from src.guests.repository.orm_models import RSVP, Guest
from src.guests.search import search_guests

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and connection failures as StorageUnavailableError.

    Integrity errors pass through untouched so callers can map them to
    conflicts.
    """
    try:
        yield
    except IntegrityError:
        raise
    except (SQLAlchemyError, OSError) as e:
        logger.error("Storage failure during %s: %s", operation, e)
        raise StorageUnavailableError(f"{operation} failed") from e


def ensure_utc(value: datetime | None) -> datetime | None:
    # sqlite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def guest_to_dto(guest: Guest) -> GuestDTO:
    return GuestDTO(
        id=guest.uuid,
        invitation_code=guest.invitation_code,
        primary_guest=guest.primary_guest,
        household_members=list(guest.household_members or []),
        max_party_size=guest.max_party_size,
        email=guest.email,
        phone=guest.phone,
        address=AddressDTO(
            street=guest.street or "",
            city=guest.city or "",
            state=guest.state or "",
            zip=guest.zip or "",
            country=guest.country or "USA",
        ),
        created_at=ensure_utc(guest.created_at),
        updated_at=ensure_utc(guest.updated_at),
    )


def rsvp_to_dto(rsvp: RSVP) -> RSVPDTO:
    return RSVPDTO(
        id=rsvp.uuid,
        guest_id=rsvp.guest_id,
        attending=rsvp.attending,
        party_size=rsvp.party_size,
        submitted_at=ensure_utc(rsvp.submitted_at),
        updated_at=ensure_utc(rsvp.updated_at),
        attendees=[
            AttendeeDTO(name=attendee.get("name", ""), meal=attendee.get("meal", ""))
            for attendee in rsvp.attendees or []
        ],
        dietary_restrictions=list(rsvp.dietary_restrictions or []),
        special_requests=rsvp.special_requests or "",
        ip_address=rsvp.ip_address,
        user_agent=rsvp.user_agent,
    )


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_guest_by_invitation_code(self, code: str) -> GuestDTO | None:
        """Codes are compared upper-cased."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_guests(self) -> list[GuestDTO]:
        raise NotImplementedError

    async def search_guests_by_name(self, name: str) -> list[GuestDTO]:
        """Guests whose primary name or a household member matches ``name``."""
        return search_guests(await self.list_guests(), name)


class SqlGuestReadModel(GuestReadModel):
    """SQL implementation of the guest read model."""

    def __init__(
        self,
        session_manager: SessionManager = async_session_manager,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.session_manager = session_manager
        self.session_overwrite = session_overwrite

    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        with storage_errors("get_guest"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                guest = await session.get(Guest, guest_id)
                return guest_to_dto(guest) if guest else None

    async def get_guest_by_invitation_code(self, code: str) -> GuestDTO | None:
        code = (code or "").strip().upper()
        if not code:
            return None
        with storage_errors("get_guest_by_invitation_code"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(select(Guest).where(Guest.invitation_code == code))
                guest = result.scalar_one_or_none()
                return guest_to_dto(guest) if guest else None

    async def list_guests(self) -> list[GuestDTO]:
        with storage_errors("list_guests"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(select(Guest).order_by(Guest.primary_guest))
                return [guest_to_dto(guest) for guest in result.scalars().all()]


class RSVPReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_rsvp(self, rsvp_id: UUID) -> RSVPDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_rsvp_by_guest_id(self, guest_id: UUID) -> RSVPDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_rsvps(self) -> list[RSVPDTO]:
        raise NotImplementedError


class SqlRSVPReadModel(RSVPReadModel):
    """SQL implementation of the RSVP read model."""

    def __init__(
        self,
        session_manager: SessionManager = async_session_manager,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.session_manager = session_manager
        self.session_overwrite = session_overwrite

    async def get_rsvp(self, rsvp_id: UUID) -> RSVPDTO | None:
        with storage_errors("get_rsvp"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                rsvp = await session.get(RSVP, rsvp_id)
                return rsvp_to_dto(rsvp) if rsvp else None

    async def get_rsvp_by_guest_id(self, guest_id: UUID) -> RSVPDTO | None:
        with storage_errors("get_rsvp_by_guest_id"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(select(RSVP).where(RSVP.guest_id == guest_id))
                rsvp = result.scalar_one_or_none()
                return rsvp_to_dto(rsvp) if rsvp else None

    async def list_rsvps(self) -> list[RSVPDTO]:
        with storage_errors("list_rsvps"):
            async with self.session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(select(RSVP).order_by(RSVP.submitted_at.desc()))
                return [rsvp_to_dto(rsvp) for rsvp in result.scalars().all()]
