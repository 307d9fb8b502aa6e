from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from src.guests.dtos import (
    AttendeeDTO,
    ClientMetadataDTO,
    GuestNotFoundError,
    RSVPConflictError,
    RSVPSubmissionDTO,
    RSVPValidationError,
    StorageUnavailableError,
)
from src.guests.features.submit_rsvp.reconciler import RSVPReconciler
from src.guests.features.submit_rsvp.write_model import (
    RepositorySubmitRSVPWriteModel,
    SubmitRSVPWriteModel,
)
from src.guests.repository.read_models import SqlGuestReadModel, SqlRSVPReadModel
from src.guests.repository.write_models import SqlRSVPWriteModel
from src.guests.urls import SUBMIT_RSVP_URL

router = APIRouter()


class AttendeeSubmit(BaseModel):
    name: str = ""
    meal: str = ""


class RSVPSubmit(BaseModel):
    guest_id: str = ""
    attending: bool
    party_size: int | None = None
    attendees: list[AttendeeSubmit] = []
    # Older form versions post names without meals
    attendee_names: list[str] = []
    special_requests: str | None = None
    dietary_restrictions: list[str] | None = None


class RSVPSubmitResponse(BaseModel):
    success: bool
    message: str
    attending: bool


def get_submit_rsvp_write_model() -> SubmitRSVPWriteModel:
    """Dependency to get the RSVP submission write model."""
    return RepositorySubmitRSVPWriteModel(
        guest_read_model=SqlGuestReadModel(),
        reconciler=RSVPReconciler(read_model=SqlRSVPReadModel(), write_model=SqlRSVPWriteModel()),
    )


def get_client_ip(request: Request) -> str | None:
    """First address in X-Forwarded-For, else the peer address."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else None


@router.post(SUBMIT_RSVP_URL, response_model=RSVPSubmitResponse)
async def submit_rsvp(
    rsvp_data: RSVPSubmit,
    request: Request,
    write_model: SubmitRSVPWriteModel = Depends(get_submit_rsvp_write_model),
) -> RSVPSubmitResponse:
    """
    Submit or update the RSVP of a guest.
    A second submission replaces the first but keeps its original submission time.
    """
    submission = RSVPSubmissionDTO(
        guest_id=rsvp_data.guest_id,
        attending=rsvp_data.attending,
        party_size=rsvp_data.party_size,
        attendees=[AttendeeDTO(name=a.name, meal=a.meal) for a in rsvp_data.attendees],
        attendee_names=rsvp_data.attendee_names,
        special_requests=rsvp_data.special_requests or "",
        dietary_restrictions=rsvp_data.dietary_restrictions or [],
    )
    client = ClientMetadataDTO(
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )

    try:
        response_dto = await write_model.submit_rsvp(submission, client)
    except RSVPValidationError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except GuestNotFoundError:
        raise HTTPException(status_code=404, detail="Guest not found")
    except RSVPConflictError:
        raise HTTPException(
            status_code=409, detail="Your RSVP was updated at the same time, please try again"
        )
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to save RSVP")

    return RSVPSubmitResponse(
        success=True,
        message=response_dto.message,
        attending=response_dto.attending,
    )
