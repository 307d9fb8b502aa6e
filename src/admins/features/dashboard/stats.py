"""Dashboard statistics.

Everything here is a pure fold over guest and RSVP lists that were already
fetched, so it can be tested without storage. ``StatsService`` does the
fetching.
"""

from collections import Counter
from collections.abc import Iterable
from uuid import UUID

from src.admins.dtos import DashboardStatsDTO, RecentRSVPDTO
from src.guests.dtos import RSVPDTO, GuestDTO, GuestWithRSVPDTO
from src.guests.repository.read_models import GuestReadModel, RSVPReadModel

RECENT_RSVP_LIMIT = 10


def invited_guest_count(guest: GuestDTO) -> int:
    if guest.max_party_size > 0:
        return guest.max_party_size
    # malformed record, count the named people instead
    return len(guest.household_members) + 1


def recent_rsvps(
    rsvps: Iterable[RSVPDTO], guests_by_id: dict[UUID, GuestDTO], limit: int = RECENT_RSVP_LIMIT
) -> list[RecentRSVPDTO]:
    """Newest first. RSVPs whose guest is unknown are skipped."""
    recent = []
    for rsvp in sorted(rsvps, key=lambda r: r.submitted_at, reverse=True):
        if len(recent) >= limit:
            break
        guest = guests_by_id.get(rsvp.guest_id)
        if guest is None:
            continue
        recent.append(
            RecentRSVPDTO(
                guest_name=guest.primary_guest,
                attending=rsvp.attending,
                party_size=rsvp.party_size,
                submitted_at=rsvp.submitted_at,
            )
        )
    return recent


def compute_dashboard_stats(
    guests: list[GuestDTO], rsvps: list[RSVPDTO], recent_limit: int = RECENT_RSVP_LIMIT
) -> DashboardStatsDTO:
    guests = [guest for guest in guests if guest is not None]
    households = len(guests)
    responses = len(rsvps)

    attending = 0
    declined = 0
    attending_guests = 0
    meals = Counter()
    for rsvp in rsvps:
        if not rsvp.attending:
            declined += 1
            continue
        attending += 1
        attending_guests += rsvp.party_size
        for attendee in rsvp.attendees:
            meal = attendee.meal.strip().casefold()
            if meal:
                meals[meal] += 1

    return DashboardStatsDTO(
        total_invited=households,
        total_households=households,
        total_invited_guests=sum(invited_guest_count(guest) for guest in guests),
        total_responses=responses,
        total_attending=attending,
        total_declined=declined,
        total_pending=households - responses,
        response_rate=responses / households * 100 if households else 0.0,
        attending_guests=attending_guests,
        meal_breakdown=dict(meals),
        recent_rsvps=recent_rsvps(rsvps, {guest.id: guest for guest in guests}, recent_limit),
    )


def join_guests_with_rsvps(
    guests: list[GuestDTO], rsvps: list[RSVPDTO]
) -> list[GuestWithRSVPDTO]:
    rsvps_by_guest = {rsvp.guest_id: rsvp for rsvp in rsvps}
    return [GuestWithRSVPDTO(guest=guest, rsvp=rsvps_by_guest.get(guest.id)) for guest in guests]


class StatsService:
    def __init__(self, guest_read_model: GuestReadModel, rsvp_read_model: RSVPReadModel) -> None:
        self.guest_read_model = guest_read_model
        self.rsvp_read_model = rsvp_read_model

    async def get_dashboard_stats(self) -> DashboardStatsDTO:
        guests = await self.guest_read_model.list_guests()
        rsvps = await self.rsvp_read_model.list_rsvps()
        return compute_dashboard_stats(guests, rsvps)

    async def get_guests_with_rsvps(self) -> list[GuestWithRSVPDTO]:
        guests = await self.guest_read_model.list_guests()
        rsvps = await self.rsvp_read_model.list_rsvps()
        return join_guests_with_rsvps(guests, rsvps)

    async def get_guest_with_rsvp(self, guest_id: UUID) -> GuestWithRSVPDTO | None:
        """None when the guest does not exist. A guest without an RSVP is not an error."""
        guest = await self.guest_read_model.get_guest(guest_id)
        if guest is None:
            return None
        rsvp = await self.rsvp_read_model.get_rsvp_by_guest_id(guest_id)
        return GuestWithRSVPDTO(guest=guest, rsvp=rsvp)
