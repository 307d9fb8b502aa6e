from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class AdminNotFoundError(Exception):
    """Raised when an admin user cannot be found."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Admin '{email}' not found")


class AdminAlreadyExistsError(Exception):
    """Raised when provisioning an admin whose e-mail is already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Admin with email '{email}' already exists")


class InvalidCredentialsError(Exception):
    """Raised when a login attempt fails, whatever the underlying reason."""

    def __init__(self, reason: str = "invalid credentials") -> None:
        self.reason = reason
        super().__init__(reason)


class AdminProvisioningError(Exception):
    """Raised when admin provisioning input is rejected."""


class AdminRole(str, Enum):
    ADMIN = "admin"
    VIEWER = "viewer"


@dataclass(frozen=True)
class AdminDTO:
    """DTO for an admin user. The password hash never leaves the repository layer
    except through ``AdminCredentialsDTO``."""

    id: UUID
    email: str
    name: str
    role: AdminRole
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login: datetime | None = None


@dataclass(frozen=True)
class AdminCredentialsDTO:
    admin: AdminDTO
    password_hash: str


@dataclass(frozen=True)
class AdminClaimsDTO:
    """Claims carried by an admin session token."""

    email: str
    name: str
    role: AdminRole
    expires_at: datetime | None = None


@dataclass(frozen=True)
class RecentRSVPDTO:
    guest_name: str
    attending: bool
    party_size: int
    submitted_at: datetime


@dataclass(frozen=True)
class DashboardStatsDTO:
    """Aggregated RSVP statistics for the admin dashboard."""

    total_invited: int = 0
    total_households: int = 0
    total_invited_guests: int = 0
    total_responses: int = 0
    total_attending: int = 0
    total_declined: int = 0
    total_pending: int = 0
    response_rate: float = 0.0
    attending_guests: int = 0
    meal_breakdown: dict[str, int] = field(default_factory=dict)
    recent_rsvps: list[RecentRSVPDTO] = field(default_factory=list)


@dataclass(frozen=True)
class AdminSessionDTO:
    """A successful login: the admin and the signed token for their cookie."""

    admin: AdminDTO
    token: str
