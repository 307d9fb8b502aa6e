import csv
import io
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, EmailStr

from src.admins.auth.dependencies import require_role
from src.admins.dtos import AdminClaimsDTO, AdminRole
from src.admins.features.dashboard.router import AdminGuestResponse, to_admin_guest_response
from src.admins.urls import GUESTS_URL, IMPORT_GUESTS_URL
from src.guests.dtos import (
    AddressDTO,
    DuplicateInvitationCodeError,
    GuestWithRSVPDTO,
    StorageUnavailableError,
)
from src.guests.features.create_guest.write_model import (
    GuestCreateWriteModel,
    SqlGuestCreateWriteModel,
)
from src.guests.features.import_guests.importer import (
    GuestImportError,
    import_guests as import_guest_rows,
    parse_guest_csv,
)
from src.guests.invite import normalize_max_party_size, parse_household_members

logger = logging.getLogger(__name__)

router = APIRouter()


class GuestCreate(BaseModel):
    primary_guest: str
    # Semicolon separated, as in the guest list spreadsheet
    household_members: str = ""
    email: EmailStr | None = None
    phone: str | None = None
    max_party_size: int | str | None = 1
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""


class ImportFailureResponse(BaseModel):
    row_number: int
    primary_guest: str
    reason: str


class GuestImportResponse(BaseModel):
    imported: int
    failed: int
    guests: list[AdminGuestResponse]
    errors: list[ImportFailureResponse]


def get_guest_create_write_model() -> GuestCreateWriteModel:
    """Dependency to get guest create write model instance."""
    return SqlGuestCreateWriteModel()


@router.post(GUESTS_URL, response_model=AdminGuestResponse, status_code=201)
async def create_guest(
    guest_data: GuestCreate,
    admin: AdminClaimsDTO = Depends(require_role(AdminRole.ADMIN)),
    write_model: GuestCreateWriteModel = Depends(get_guest_create_write_model),
) -> AdminGuestResponse:
    """Add a household to the guest list with a freshly generated invitation code."""
    if not guest_data.primary_guest.strip():
        raise HTTPException(status_code=400, detail="Primary guest name is required")

    try:
        guest = await write_model.create_guest(
            primary_guest=guest_data.primary_guest,
            household_members=parse_household_members(guest_data.household_members),
            max_party_size=normalize_max_party_size(guest_data.max_party_size),
            email=guest_data.email,
            phone=guest_data.phone,
            address=AddressDTO(
                street=guest_data.street.strip(),
                city=guest_data.city.strip(),
                state=guest_data.state.strip(),
                zip=guest_data.zip.strip(),
            ),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateInvitationCodeError:
        raise HTTPException(status_code=409, detail="Failed to generate invitation code")
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Failed to create guest")

    logger.info("Guest %s created by %s", guest.primary_guest, admin.email)
    return to_admin_guest_response(GuestWithRSVPDTO(guest=guest))


@router.post(IMPORT_GUESTS_URL, response_model=GuestImportResponse)
async def import_guests(
    csv_file: UploadFile = File(...),
    admin: AdminClaimsDTO = Depends(require_role(AdminRole.ADMIN)),
    write_model: GuestCreateWriteModel = Depends(get_guest_create_write_model),
) -> GuestImportResponse:
    """
    Bulk-add guests from an uploaded CSV guest list.
    Rows that fail are reported and the rest are still imported.
    """
    try:
        content = (await csv_file.read()).decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded")

    try:
        rows = parse_guest_csv(io.StringIO(content, newline=""))
    except GuestImportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except csv.Error as e:
        raise HTTPException(status_code=400, detail=f"Failed to read CSV file: {e}")

    result = await import_guest_rows(rows, write_model)

    logger.info(
        "Guest import by %s: %d created, %d failed",
        admin.email,
        len(result.created),
        len(result.failed),
    )
    return GuestImportResponse(
        imported=len(result.created),
        failed=len(result.failed),
        guests=[to_admin_guest_response(GuestWithRSVPDTO(guest=guest)) for guest in result.created],
        errors=[
            ImportFailureResponse(
                row_number=row.row_number, primary_guest=row.primary_guest, reason=reason
            )
            for row, reason in result.failed
        ],
    )
