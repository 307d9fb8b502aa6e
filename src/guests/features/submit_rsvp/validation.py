"""Attendee rules for an RSVP submission."""

from src.guests.dtos import AttendeeDTO, RSVPSubmissionDTO, RSVPValidationError

ALLOWED_MEAL_OPTIONS = (
    "Roasted Boneless Chicken Breast",
    "Grilled Brandt Farms 10z NY Strip",
    "Roasted Cauliflower Al Pastor (GF-V)",
)

_ALLOWED_MEALS = frozenset(meal.casefold() for meal in ALLOWED_MEAL_OPTIONS)


def normalize_meal(meal: str | None) -> str:
    return (meal or "").strip().casefold()


def validate_attendees(
    submission: RSVPSubmissionDTO, max_party_size: int
) -> tuple[list[AttendeeDTO], int]:
    """Return the cleaned attendee list and the resolved party size.

    Checks run in a fixed order and the first failure is raised as
    RSVPValidationError. A guest who is not attending always yields ``([], 0)``.
    Accepted attendees carry the trimmed name and the case-folded meal.
    """
    if not submission.attending:
        return [], 0

    attendees = []
    for attendee in submission.attendees:
        name = (attendee.name or "").strip()
        meal = normalize_meal(attendee.meal)
        if not name:
            raise RSVPValidationError("Each attending guest must include a name")
        if not meal:
            raise RSVPValidationError("Each attending guest must select a meal")
        if meal not in _ALLOWED_MEALS:
            raise RSVPValidationError("Invalid meal selection")
        attendees.append(AttendeeDTO(name=name, meal=meal))

    # stale clients still post a bare name list with no meals
    if not attendees and submission.attendee_names:
        raise RSVPValidationError("Each attending guest must select a meal")
    if not attendees:
        raise RSVPValidationError("At least one attending guest is required")

    party_size = submission.party_size or len(attendees)
    if party_size < 1:
        raise RSVPValidationError("Party size must be at least 1")
    if party_size > max_party_size:
        raise RSVPValidationError("Party size exceeds maximum allowed")
    if party_size != len(attendees):
        raise RSVPValidationError("Guest count and party size must match")

    return attendees, party_size
