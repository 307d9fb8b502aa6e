from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class GuestNotFoundError(Exception):
    """Raised when a guest cannot be found by ID or invitation code."""

    def __init__(self, guest_ref: str) -> None:
        self.guest_ref = guest_ref
        super().__init__(f"Guest '{guest_ref}' not found")


class InvalidInvitationCodeError(Exception):
    """Raised when an invitation code is malformed."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Invalid invitation code '{code}'")


class DuplicateInvitationCodeError(Exception):
    """Raised when a guest is created with an invitation code that is already taken."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Invitation code '{code}' is already in use")


class RSVPConflictError(Exception):
    """Raised when a conditional RSVP write loses a race.

    Either a create found an RSVP already stored for the guest, or an update
    found the record gone.
    """

    def __init__(self, guest_id: UUID, reason: str) -> None:
        self.guest_id = guest_id
        self.reason = reason
        super().__init__(f"RSVP write for guest {guest_id} conflicted: {reason}")


class RSVPValidationError(Exception):
    """Raised when an RSVP submission breaks one of the attendee rules."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class StorageUnavailableError(Exception):
    """Raised when the backing store cannot be reached."""


class RSVPStatus(str, Enum):
    PENDING = "Pending"
    RESPONDED = "Responded"


@dataclass(frozen=True)
class AddressDTO:
    """Mailing address of a household."""

    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = "USA"


@dataclass(frozen=True)
class GuestDTO:
    """DTO for an invited household."""

    id: UUID
    invitation_code: str
    primary_guest: str
    household_members: list[str] = field(default_factory=list)
    max_party_size: int = 1
    email: str | None = None
    phone: str | None = None
    address: AddressDTO = field(default_factory=AddressDTO)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class AttendeeDTO:
    """One named person in an RSVP and their meal choice."""

    name: str
    meal: str


@dataclass(frozen=True)
class RSVPDTO:
    """DTO for a stored RSVP."""

    id: UUID
    guest_id: UUID
    attending: bool
    party_size: int
    submitted_at: datetime
    updated_at: datetime
    attendees: list[AttendeeDTO] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)
    special_requests: str = ""
    ip_address: str | None = None
    user_agent: str | None = None

    @property
    def attendee_names(self) -> list[str]:
        return [attendee.name for attendee in self.attendees]


@dataclass(frozen=True)
class RSVPSubmissionDTO:
    """Raw RSVP form submission, before validation.

    ``attendee_names`` is the flat name list sent by older clients that
    predate per-attendee meal selection.
    """

    guest_id: str
    attending: bool
    party_size: int | None = None
    attendees: list[AttendeeDTO] = field(default_factory=list)
    attendee_names: list[str] = field(default_factory=list)
    special_requests: str = ""
    dietary_restrictions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ClientMetadataDTO:
    """Network details of the client that submitted an RSVP."""

    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class RSVPDraftDTO:
    """Validated RSVP content, ready to be stored."""

    attending: bool
    party_size: int
    attendees: list[AttendeeDTO] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)
    special_requests: str = ""
    client: ClientMetadataDTO = field(default_factory=ClientMetadataDTO)


@dataclass(frozen=True)
class RSVPResponseDTO:
    """DTO for RSVP response."""

    message: str
    attending: bool
    rsvp: RSVPDTO


@dataclass(frozen=True)
class GuestWithRSVPDTO:
    """A guest joined with their RSVP, if they have responded."""

    guest: GuestDTO
    rsvp: RSVPDTO | None = None

    @property
    def status(self) -> RSVPStatus:
        return RSVPStatus.RESPONDED if self.rsvp else RSVPStatus.PENDING
