from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.guests.dtos import StorageUnavailableError
from src.guests.repository.read_models import GuestReadModel, SqlGuestReadModel
from src.guests.urls import SEARCH_GUESTS_URL

router = APIRouter()


class GuestSearchRequest(BaseModel):
    name: str = ""


class GuestSearchResult(BaseModel):
    guest_id: UUID
    primary_guest: str
    household_members: list[str]
    max_party_size: int


class GuestSearchResponse(BaseModel):
    guests: list[GuestSearchResult]
    count: int


def get_guest_read_model() -> GuestReadModel:
    """Dependency to get guest read model instance."""
    return SqlGuestReadModel()


@router.post(SEARCH_GUESTS_URL, response_model=GuestSearchResponse)
async def search_guests(
    search: GuestSearchRequest,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> GuestSearchResponse:
    """
    Find invited households by name so a guest can pick their invitation.
    Matches the primary guest or any household member, ignoring case and spacing.
    """
    if not search.name.strip():
        raise HTTPException(status_code=400, detail="Name is required")

    try:
        guests = await read_model.search_guests_by_name(search.name)
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to search guests")

    return GuestSearchResponse(
        guests=[
            GuestSearchResult(
                guest_id=guest.id,
                primary_guest=guest.primary_guest,
                household_members=guest.household_members,
                max_party_size=guest.max_party_size,
            )
            for guest in guests
        ],
        count=len(guests),
    )
