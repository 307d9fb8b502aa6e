"""CSV export of every guest and their RSVP."""

import csv
import io
from collections.abc import Iterable
from datetime import UTC

from src.guests.dtos import RSVPDTO, GuestWithRSVPDTO

CSV_COLUMNS = [
    "Primary Guest",
    "Email",
    "Invitation Code",
    "Max Party Size",
    "RSVP Status",
    "Attending",
    "Party Size",
    "Attendee Meals",
    "Special Requests",
    "Submitted At",
]


def format_attendee_meals(rsvp: RSVPDTO) -> str:
    """``Name (meal); Name (meal)``, or just the names where no meal was chosen."""
    return "; ".join(
        f"{attendee.name} ({attendee.meal})" if attendee.meal else attendee.name
        for attendee in rsvp.attendees
    )


def csv_row(row: GuestWithRSVPDTO) -> list[str]:
    guest, rsvp = row.guest, row.rsvp
    values = [
        guest.primary_guest,
        guest.email or "",
        guest.invitation_code,
        str(guest.max_party_size),
        row.status.value,
    ]
    if rsvp is None:
        return values + ["", "", "", "", ""]
    return values + [
        "true" if rsvp.attending else "false",
        str(rsvp.party_size),
        format_attendee_meals(rsvp),
        rsvp.special_requests,
        rsvp.submitted_at.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S"),
    ]


def write_rsvps_csv(rows: Iterable[GuestWithRSVPDTO], stream: io.TextIOBase) -> None:
    writer = csv.writer(stream)
    writer.writerow(CSV_COLUMNS)
    for row in rows:
        writer.writerow(csv_row(row))


def rsvps_csv(rows: Iterable[GuestWithRSVPDTO]) -> str:
    buffer = io.StringIO()
    write_rsvps_csv(rows, buffer)
    return buffer.getvalue()
