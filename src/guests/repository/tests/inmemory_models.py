"""In-memory models for testing - no database required."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from src.guests.dtos import (
    RSVPDTO,
    AttendeeDTO,
    DuplicateInvitationCodeError,
    GuestDTO,
    GuestNotFoundError,
    RSVPConflictError,
)
from src.guests.repository.read_models import GuestReadModel, RSVPReadModel
from src.guests.repository.write_models import GuestWriteModel, RSVPWriteModel


# =============================================================================
# In-Memory Storage
# =============================================================================

@dataclass
class InMemoryStore:
    """Guests and RSVPs shared by the in-memory read and write models."""

    guests: dict[UUID, GuestDTO] = field(default_factory=dict)
    rsvps: dict[UUID, RSVPDTO] = field(default_factory=dict)

    @classmethod
    def with_guests(cls, *guests: GuestDTO) -> "InMemoryStore":
        return cls(guests={guest.id: guest for guest in guests})


# =============================================================================
# In-Memory Read Models
# =============================================================================

class InMemoryGuestReadModel(GuestReadModel):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        return self._store.guests.get(guest_id)

    async def get_guest_by_invitation_code(self, code: str) -> GuestDTO | None:
        code = (code or "").strip().upper()
        for guest in self._store.guests.values():
            if guest.invitation_code.upper() == code:
                return guest
        return None

    async def list_guests(self) -> list[GuestDTO]:
        return sorted(self._store.guests.values(), key=lambda guest: guest.primary_guest)


class InMemoryRSVPReadModel(RSVPReadModel):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_rsvp(self, rsvp_id: UUID) -> RSVPDTO | None:
        for rsvp in self._store.rsvps.values():
            if rsvp.id == rsvp_id:
                return rsvp
        return None

    async def get_rsvp_by_guest_id(self, guest_id: UUID) -> RSVPDTO | None:
        return self._store.rsvps.get(guest_id)

    async def list_rsvps(self) -> list[RSVPDTO]:
        return sorted(self._store.rsvps.values(), key=lambda rsvp: rsvp.submitted_at, reverse=True)


# =============================================================================
# In-Memory Write Models
# =============================================================================

class InMemoryGuestWriteModel(GuestWriteModel):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def create_guest(self, guest: GuestDTO) -> GuestDTO:
        code = guest.invitation_code.upper()
        if any(existing.invitation_code == code for existing in self._store.guests.values()):
            raise DuplicateInvitationCodeError(code)
        guest = replace(guest, invitation_code=code)
        self._store.guests[guest.id] = guest
        return guest

    async def update_guest(self, guest: GuestDTO) -> GuestDTO:
        if guest.id not in self._store.guests:
            raise GuestNotFoundError(str(guest.id))
        self._store.guests[guest.id] = guest
        return guest

    async def delete_guest(self, guest_id: UUID) -> None:
        if self._store.guests.pop(guest_id, None) is None:
            raise GuestNotFoundError(str(guest_id))
        self._store.rsvps.pop(guest_id, None)


class InMemoryRSVPWriteModel(RSVPWriteModel):
    """Write model that also counts writes, so tests can assert one write per submit."""

    def __init__(self, store: InMemoryStore):
        self._store = store
        self.creates = 0
        self.updates = 0

    async def create_rsvp(self, rsvp: RSVPDTO) -> RSVPDTO:
        if rsvp.guest_id in self._store.rsvps:
            raise RSVPConflictError(rsvp.guest_id, "rsvp already exists")
        self.creates += 1
        self._store.rsvps[rsvp.guest_id] = rsvp
        return rsvp

    async def update_rsvp(self, rsvp: RSVPDTO) -> RSVPDTO:
        existing = self._store.rsvps.get(rsvp.guest_id)
        if existing is None or existing.id != rsvp.id:
            raise RSVPConflictError(rsvp.guest_id, "rsvp no longer exists")
        self.updates += 1
        self._store.rsvps[rsvp.guest_id] = replace(rsvp, submitted_at=existing.submitted_at)
        return rsvp


# =============================================================================
# Factories
# =============================================================================

def make_guest(
    primary_guest: str = "Jess & Evan Sahagian",
    household_members: list[str] | None = None,
    max_party_size: int = 2,
    invitation_code: str = "ABCD2345",
    **kwargs,
) -> GuestDTO:
    return GuestDTO(
        id=kwargs.pop("id", None) or uuid4(),
        invitation_code=invitation_code,
        primary_guest=primary_guest,
        household_members=household_members or [],
        max_party_size=max_party_size,
        **kwargs,
    )


def make_rsvp(
    guest_id: UUID,
    attending: bool = True,
    attendees: list[AttendeeDTO] | None = None,
    submitted_at: datetime | None = None,
    **kwargs,
) -> RSVPDTO:
    attendees = attendees if attendees is not None else []
    submitted_at = submitted_at or datetime(2026, 5, 1, 12, 0, tzinfo=UTC)
    return RSVPDTO(
        id=kwargs.pop("id", None) or uuid4(),
        guest_id=guest_id,
        attending=attending,
        party_size=kwargs.pop("party_size", len(attendees)),
        submitted_at=submitted_at,
        updated_at=kwargs.pop("updated_at", submitted_at),
        attendees=attendees,
        **kwargs,
    )
