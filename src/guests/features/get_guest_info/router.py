from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.guests.dtos import (
    RSVPDTO,
    GuestDTO,
    InvalidInvitationCodeError,
    StorageUnavailableError,
)
from src.guests.features.submit_rsvp.validation import ALLOWED_MEAL_OPTIONS
from src.guests.invite import normalize_invitation_code
from src.guests.repository.read_models import (
    GuestReadModel,
    RSVPReadModel,
    SqlGuestReadModel,
    SqlRSVPReadModel,
)
from src.guests.urls import GET_GUEST_INFO_URL, GET_INVITATION_URL

router = APIRouter()


class AttendeeResponse(BaseModel):
    name: str
    meal: str


class RSVPPrefillResponse(BaseModel):
    """The stored answer, used to prefill the form on a repeat visit."""

    attending: bool
    party_size: int
    attendees: list[AttendeeResponse]
    dietary_restrictions: list[str]
    special_requests: str
    submitted_at: datetime
    updated_at: datetime


class GuestInfoResponse(BaseModel):
    guest_id: UUID
    primary_guest: str
    household_members: list[str]
    max_party_size: int
    meal_options: list[str]
    rsvp: RSVPPrefillResponse | None = None


def get_guest_read_model() -> GuestReadModel:
    """Dependency to get guest read model instance."""
    return SqlGuestReadModel()


def get_rsvp_read_model() -> RSVPReadModel:
    """Dependency to get RSVP read model instance."""
    return SqlRSVPReadModel()


def _to_response(guest: GuestDTO, rsvp: RSVPDTO | None) -> GuestInfoResponse:
    prefill = None
    if rsvp is not None:
        prefill = RSVPPrefillResponse(
            attending=rsvp.attending,
            party_size=rsvp.party_size,
            attendees=[AttendeeResponse(name=a.name, meal=a.meal) for a in rsvp.attendees],
            dietary_restrictions=rsvp.dietary_restrictions,
            special_requests=rsvp.special_requests,
            submitted_at=rsvp.submitted_at,
            updated_at=rsvp.updated_at,
        )
    return GuestInfoResponse(
        guest_id=guest.id,
        primary_guest=guest.primary_guest,
        household_members=guest.household_members,
        max_party_size=guest.max_party_size,
        meal_options=list(ALLOWED_MEAL_OPTIONS),
        rsvp=prefill,
    )


@router.get(GET_GUEST_INFO_URL, response_model=GuestInfoResponse)
async def get_guest_info(
    guest_id: str,
    guest_read_model: GuestReadModel = Depends(get_guest_read_model),
    rsvp_read_model: RSVPReadModel = Depends(get_rsvp_read_model),
) -> GuestInfoResponse:
    """
    Get the RSVP form data for a guest picked from search results.
    Includes the existing RSVP, if any, for prefill.
    """
    try:
        guest_uuid = UUID(guest_id.strip())
    except ValueError:
        raise HTTPException(status_code=404, detail="Guest not found")

    try:
        guest = await guest_read_model.get_guest(guest_uuid)
        if not guest:
            raise HTTPException(status_code=404, detail="Guest not found")
        rsvp = await rsvp_read_model.get_rsvp_by_guest_id(guest.id)
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to load guest")

    return _to_response(guest, rsvp)


@router.get(GET_INVITATION_URL, response_model=GuestInfoResponse)
async def get_invitation(
    code: str,
    guest_read_model: GuestReadModel = Depends(get_guest_read_model),
    rsvp_read_model: RSVPReadModel = Depends(get_rsvp_read_model),
) -> GuestInfoResponse:
    """
    Get the RSVP form data for the guest holding an invitation code.
    Codes are case-insensitive.
    """
    try:
        code = normalize_invitation_code(code)
    except InvalidInvitationCodeError:
        raise HTTPException(status_code=404, detail="Invalid invitation code")

    try:
        guest = await guest_read_model.get_guest_by_invitation_code(code)
        if not guest:
            raise HTTPException(status_code=404, detail="Invalid invitation code")
        rsvp = await rsvp_read_model.get_rsvp_by_guest_id(guest.id)
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to load invitation")

    return _to_response(guest, rsvp)
