"""Bulk guest import from a CSV guest list.

The first row is a header. Columns are looked up by name, so their order does
not matter; only ``primary_guest`` is required. Household members are
separated by semicolons.
"""

import csv
import logging
from dataclasses import dataclass, field
from typing import TextIO

from src.guests.dtos import AddressDTO, GuestDTO
from src.guests.features.create_guest.write_model import GuestCreateWriteModel
from src.guests.invite import normalize_max_party_size, parse_household_members

logger = logging.getLogger(__name__)


class GuestImportError(Exception):
    """Raised when a guest list cannot be read at all."""


@dataclass(frozen=True)
class GuestImportRow:
    row_number: int
    primary_guest: str
    household_members: list[str] = field(default_factory=list)
    email: str | None = None
    max_party_size: int = 1
    address: AddressDTO = field(default_factory=AddressDTO)


@dataclass(frozen=True)
class GuestImportResultDTO:
    created: list[GuestDTO] = field(default_factory=list)
    failed: list[tuple[GuestImportRow, str]] = field(default_factory=list)


def _cell(record: dict, column: str) -> str:
    return (record.get(column) or "").strip()


def parse_guest_csv(stream: TextIO) -> list[GuestImportRow]:
    reader = csv.DictReader(stream)
    header = [name.strip().lower() for name in reader.fieldnames or []]
    if "primary_guest" not in header:
        raise GuestImportError("CSV header must include a primary_guest column")
    reader.fieldnames = header

    rows = []
    # row 1 is the header
    for row_number, record in enumerate(reader, start=2):
        primary_guest = _cell(record, "primary_guest")
        if not primary_guest:
            logger.warning("Skipping row %d: no primary_guest", row_number)
            continue
        rows.append(
            GuestImportRow(
                row_number=row_number,
                primary_guest=primary_guest,
                household_members=parse_household_members(record.get("household_members")),
                email=_cell(record, "email") or None,
                max_party_size=normalize_max_party_size(record.get("max_party_size")),
                address=AddressDTO(
                    street=_cell(record, "street"),
                    city=_cell(record, "city"),
                    state=_cell(record, "state"),
                    zip=_cell(record, "zip"),
                ),
            )
        )

    if not rows:
        raise GuestImportError("No valid guest rows found in CSV")
    return rows


async def import_guests(
    rows: list[GuestImportRow], create_model: GuestCreateWriteModel
) -> GuestImportResultDTO:
    """Create one guest per row. A failing row is reported and the rest still run."""
    result = GuestImportResultDTO()
    for row in rows:
        try:
            guest = await create_model.create_guest(
                primary_guest=row.primary_guest,
                household_members=row.household_members,
                max_party_size=row.max_party_size,
                email=row.email,
                address=row.address,
            )
        except Exception as e:
            logger.error("Failed to import row %d (%s): %s", row.row_number, row.primary_guest, e)
            result.failed.append((row, str(e)))
            continue
        result.created.append(guest)

    logger.info("Guest import finished: %d created, %d failed", len(result.created), len(result.failed))
    return result
