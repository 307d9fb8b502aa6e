"""Invitation codes and household parsing helpers."""

import secrets

from src.guests.dtos import InvalidInvitationCodeError

# No I, O, 0 or 1 so printed codes can't be misread
INVITATION_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITATION_CODE_LENGTH = 8


def generate_invitation_code() -> str:
    return "".join(secrets.choice(INVITATION_CODE_ALPHABET) for _ in range(INVITATION_CODE_LENGTH))


def normalize_invitation_code(code: str | None) -> str:
    """Upper-case and trim a code typed or scanned by a guest.

    Raises InvalidInvitationCodeError when the result cannot be a code we issued.
    """
    normalized = (code or "").strip().upper()
    if len(normalized) != INVITATION_CODE_LENGTH or any(
        char not in INVITATION_CODE_ALPHABET for char in normalized
    ):
        raise InvalidInvitationCodeError(code or "")
    return normalized


def parse_household_members(members: str | None) -> list[str]:
    """Split a semicolon separated list of names, dropping blanks."""
    members = (members or "").strip()
    if not members:
        return []
    return [part.strip() for part in members.split(";") if part.strip()]


def normalize_max_party_size(raw: str | int | None) -> int:
    """Parse a party size, falling back to 1 for anything missing or below 1."""
    try:
        parsed = int(str(raw).strip())
    except (TypeError, ValueError):
        return 1
    return parsed if parsed >= 1 else 1
