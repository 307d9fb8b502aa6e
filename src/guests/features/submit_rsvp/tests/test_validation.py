from itertools import product

import pytest

from src.guests.dtos import AttendeeDTO, RSVPSubmissionDTO, RSVPValidationError
from src.guests.features.submit_rsvp.validation import ALLOWED_MEAL_OPTIONS, validate_attendees

CHICKEN, STEAK, CAULIFLOWER = ALLOWED_MEAL_OPTIONS


def submission(attending=True, attendees=(), party_size=None, attendee_names=()):
    return RSVPSubmissionDTO(
        guest_id="ignored",
        attending=attending,
        party_size=party_size,
        attendees=list(attendees),
        attendee_names=list(attendee_names),
    )


def test_not_attending_skips_every_check():
    """A declined RSVP is always valid, whatever else was sent."""
    result = validate_attendees(
        submission(attending=False, attendees=[AttendeeDTO("", "pizza")], party_size=9),
        max_party_size=1,
    )
    assert result == ([], 0)


def test_party_size_defaults_to_attendee_count():
    attendees, party_size = validate_attendees(
        submission(attendees=[AttendeeDTO("Jess", CHICKEN), AttendeeDTO("Evan", STEAK)]),
        max_party_size=2,
    )
    assert party_size == 2
    assert [a.name for a in attendees] == ["Jess", "Evan"]


def test_zero_party_size_counts_as_not_supplied():
    _, party_size = validate_attendees(
        submission(attendees=[AttendeeDTO("Jess", CHICKEN)], party_size=0), max_party_size=2
    )
    assert party_size == 1


def test_names_are_trimmed_and_meals_case_folded():
    attendees, _ = validate_attendees(
        submission(attendees=[AttendeeDTO("  Jess  ", f"  {CAULIFLOWER.upper()} ")]),
        max_party_size=1,
    )
    assert attendees == [AttendeeDTO(name="Jess", meal=CAULIFLOWER.casefold())]


@pytest.mark.parametrize(
    "attendee, reason",
    [
        (AttendeeDTO("   ", CHICKEN), "Each attending guest must include a name"),
        (AttendeeDTO("Jess", "  "), "Each attending guest must select a meal"),
        (AttendeeDTO("Jess", "Pizza"), "Invalid meal selection"),
    ],
)
def test_attendee_rules(attendee, reason):
    with pytest.raises(RSVPValidationError) as exc_info:
        validate_attendees(submission(attendees=[attendee]), max_party_size=2)
    assert exc_info.value.reason == reason


def test_name_is_checked_before_meal():
    with pytest.raises(RSVPValidationError) as exc_info:
        validate_attendees(submission(attendees=[AttendeeDTO("", "")]), max_party_size=2)
    assert exc_info.value.reason == "Each attending guest must include a name"


def test_legacy_name_list_without_meals_is_rejected():
    with pytest.raises(RSVPValidationError) as exc_info:
        validate_attendees(submission(attendee_names=["Jess", "Evan"]), max_party_size=2)
    assert exc_info.value.reason == "Each attending guest must select a meal"


def test_attending_with_nobody_is_rejected():
    with pytest.raises(RSVPValidationError) as exc_info:
        validate_attendees(submission(), max_party_size=2)
    assert exc_info.value.reason == "At least one attending guest is required"


def test_negative_party_size_is_rejected():
    with pytest.raises(RSVPValidationError) as exc_info:
        validate_attendees(
            submission(attendees=[AttendeeDTO("Jess", CHICKEN)], party_size=-1), max_party_size=2
        )
    assert exc_info.value.reason == "Party size must be at least 1"


def test_party_larger_than_invitation_is_rejected():
    attendees = [AttendeeDTO(name, CHICKEN) for name in ("Jess", "Evan", "Sam")]
    with pytest.raises(RSVPValidationError) as exc_info:
        validate_attendees(submission(attendees=attendees), max_party_size=2)
    assert exc_info.value.reason == "Party size exceeds maximum allowed"


def test_party_size_must_match_attendee_count():
    with pytest.raises(RSVPValidationError) as exc_info:
        validate_attendees(
            submission(attendees=[AttendeeDTO("Jess", CHICKEN)], party_size=2), max_party_size=2
        )
    assert exc_info.value.reason == "Guest count and party size must match"


NAMES = ["Jess", "  Evan ", "", "   "]
MEALS = [CHICKEN, STEAK.upper(), f"  {CAULIFLOWER.lower()} ", "", "Pizza"]
ATTENDEE_VARIANTS = [AttendeeDTO(name, meal) for name, meal in product(NAMES, MEALS)]
# every attendee list of up to three entries
ATTENDEE_LISTS = [
    list(attendees)
    for size in range(4)
    for attendees in product(ATTENDEE_VARIANTS[:6], repeat=size)
]
ATTENDEE_LISTS += [[attendee] for attendee in ATTENDEE_VARIANTS]

REASONS = {
    "Each attending guest must include a name",
    "Each attending guest must select a meal",
    "Invalid meal selection",
    "At least one attending guest is required",
    "Party size must be at least 1",
    "Party size exceeds maximum allowed",
    "Guest count and party size must match",
}
ALLOWED = {meal.casefold() for meal in ALLOWED_MEAL_OPTIONS}


@pytest.mark.parametrize(
    "party_size, max_party_size", list(product([None, -1, 0, 1, 2, 3, 4], [1, 2, 3]))
)
def test_validate_attendees_properties(party_size, max_party_size):
    for attendees in ATTENDEE_LISTS:
        for legacy_names in ([], ["Jess"]):
            sent = submission(attendees=attendees, party_size=party_size, attendee_names=legacy_names)

            assert validate_attendees(
                submission(
                    attending=False,
                    attendees=attendees,
                    party_size=party_size,
                    attendee_names=legacy_names,
                ),
                max_party_size,
            ) == ([], 0)

            try:
                accepted, resolved_size = validate_attendees(sent, max_party_size)
            except RSVPValidationError as e:
                assert e.reason in REASONS, (attendees, party_size)
                continue

            assert 1 <= resolved_size <= max_party_size
            assert resolved_size == len(accepted) == len(attendees)
            for original, cleaned in zip(attendees, accepted):
                assert cleaned.name == original.name.strip() != ""
                assert cleaned.meal == original.meal.strip().casefold()
                assert cleaned.meal in ALLOWED
