import logging
from dataclasses import asdict
from datetime import UTC, datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from src.admins.auth.dependencies import get_current_admin
from src.admins.dtos import AdminClaimsDTO
from src.admins.features.dashboard.export import rsvps_csv
from src.admins.features.dashboard.stats import StatsService
from src.admins.urls import DASHBOARD_URL, EXPORT_CSV_URL, GUEST_DETAIL_URL, GUESTS_URL
from src.config.settings import settings
from src.guests.dtos import GuestWithRSVPDTO, RSVPStatus, StorageUnavailableError
from src.guests.repository.read_models import SqlGuestReadModel, SqlRSVPReadModel

logger = logging.getLogger(__name__)

router = APIRouter()


class RecentRSVPResponse(BaseModel):
    guest_name: str
    attending: bool
    party_size: int
    submitted_at: datetime


class DashboardStatsResponse(BaseModel):
    total_invited: int
    total_households: int
    total_invited_guests: int
    total_responses: int
    total_attending: int
    total_declined: int
    total_pending: int
    response_rate: float
    attending_guests: int
    meal_breakdown: dict[str, int]
    recent_rsvps: list[RecentRSVPResponse]


class AddressResponse(BaseModel):
    street: str
    city: str
    state: str
    zip: str
    country: str


class AttendeeResponse(BaseModel):
    name: str
    meal: str


class AdminRSVPResponse(BaseModel):
    rsvp_id: UUID
    attending: bool
    party_size: int
    attendees: list[AttendeeResponse]
    dietary_restrictions: list[str]
    special_requests: str
    submitted_at: datetime
    updated_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None


class AdminGuestResponse(BaseModel):
    guest_id: UUID
    invitation_code: str
    invitation_url: str
    primary_guest: str
    household_members: list[str]
    max_party_size: int
    email: str | None = None
    phone: str | None = None
    address: AddressResponse
    status: RSVPStatus
    rsvp: AdminRSVPResponse | None = None


def get_stats_service() -> StatsService:
    """Dependency to get the dashboard stats service."""
    return StatsService(guest_read_model=SqlGuestReadModel(), rsvp_read_model=SqlRSVPReadModel())


def invitation_url(code: str) -> str:
    return f"{settings.site_url.rstrip('/')}/rsvp?code={code}"


def to_admin_guest_response(row: GuestWithRSVPDTO) -> AdminGuestResponse:
    guest, rsvp = row.guest, row.rsvp
    return AdminGuestResponse(
        guest_id=guest.id,
        invitation_code=guest.invitation_code,
        invitation_url=invitation_url(guest.invitation_code),
        primary_guest=guest.primary_guest,
        household_members=guest.household_members,
        max_party_size=guest.max_party_size,
        email=guest.email,
        phone=guest.phone,
        address=AddressResponse(**asdict(guest.address)),
        status=row.status,
        rsvp=AdminRSVPResponse(
            rsvp_id=rsvp.id,
            attending=rsvp.attending,
            party_size=rsvp.party_size,
            attendees=[AttendeeResponse(name=a.name, meal=a.meal) for a in rsvp.attendees],
            dietary_restrictions=rsvp.dietary_restrictions,
            special_requests=rsvp.special_requests,
            submitted_at=rsvp.submitted_at,
            updated_at=rsvp.updated_at,
            ip_address=rsvp.ip_address,
            user_agent=rsvp.user_agent,
        )
        if rsvp
        else None,
    )


@router.get(DASHBOARD_URL, response_model=DashboardStatsResponse)
async def get_dashboard(
    admin: AdminClaimsDTO = Depends(get_current_admin),
    stats_service: StatsService = Depends(get_stats_service),
) -> DashboardStatsResponse:
    try:
        stats = await stats_service.get_dashboard_stats()
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to load dashboard")

    return DashboardStatsResponse(
        total_invited=stats.total_invited,
        total_households=stats.total_households,
        total_invited_guests=stats.total_invited_guests,
        total_responses=stats.total_responses,
        total_attending=stats.total_attending,
        total_declined=stats.total_declined,
        total_pending=stats.total_pending,
        response_rate=round(stats.response_rate, 2),
        attending_guests=stats.attending_guests,
        meal_breakdown=stats.meal_breakdown,
        recent_rsvps=[RecentRSVPResponse(**asdict(recent)) for recent in stats.recent_rsvps],
    )


@router.get(GUESTS_URL, response_model=list[AdminGuestResponse])
async def list_guests(
    admin: AdminClaimsDTO = Depends(get_current_admin),
    stats_service: StatsService = Depends(get_stats_service),
) -> list[AdminGuestResponse]:
    """Every guest with their RSVP, if any."""
    try:
        rows = await stats_service.get_guests_with_rsvps()
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to load guests")
    return [to_admin_guest_response(row) for row in rows]


@router.get(GUEST_DETAIL_URL, response_model=AdminGuestResponse)
async def get_guest(
    guest_id: UUID,
    admin: AdminClaimsDTO = Depends(get_current_admin),
    stats_service: StatsService = Depends(get_stats_service),
) -> AdminGuestResponse:
    try:
        row = await stats_service.get_guest_with_rsvp(guest_id)
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to load guest")
    if row is None:
        raise HTTPException(status_code=404, detail="Guest not found")
    return to_admin_guest_response(row)


@router.get(EXPORT_CSV_URL)
async def export_csv(
    admin: AdminClaimsDTO = Depends(get_current_admin),
    stats_service: StatsService = Depends(get_stats_service),
) -> Response:
    try:
        rows = await stats_service.get_guests_with_rsvps()
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to export RSVPs")

    filename = f"rsvps_{datetime.now(UTC):%Y-%m-%d}.csv"
    logger.info("RSVP data exported by %s: %d rows", admin.email, len(rows))
    return Response(
        content=rsvps_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
