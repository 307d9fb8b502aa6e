from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from src.guests.dtos import RSVPDTO, RSVPDraftDTO
from src.guests.repository.read_models import RSVPReadModel
from src.guests.repository.write_models import RSVPWriteModel


def utc_now() -> datetime:
    return datetime.now(UTC)


class RSVPReconciler:
    """Turns a validated draft into the single stored RSVP for a guest.

    One read of the current RSVP, then exactly one conditional write. A first
    response is created; a repeat response overwrites everything except the
    record id and the original ``submitted_at``.
    """

    def __init__(
        self,
        read_model: RSVPReadModel,
        write_model: RSVPWriteModel,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self.read_model = read_model
        self.write_model = write_model
        self.clock = clock
        self.id_factory = id_factory

    async def reconcile(self, guest_id: UUID, draft: RSVPDraftDTO) -> RSVPDTO:
        existing = await self.read_model.get_rsvp_by_guest_id(guest_id)
        now = self.clock()

        if draft.attending:
            dietary_restrictions = list(draft.dietary_restrictions)
            special_requests = draft.special_requests
        else:
            dietary_restrictions = []
            special_requests = ""

        if existing is not None:
            rsvp = replace(
                existing,
                attending=draft.attending,
                party_size=draft.party_size,
                attendees=list(draft.attendees),
                dietary_restrictions=dietary_restrictions,
                special_requests=special_requests,
                updated_at=now,
                ip_address=draft.client.ip_address,
                user_agent=draft.client.user_agent,
            )
            return await self.write_model.update_rsvp(rsvp)

        rsvp = RSVPDTO(
            id=self.id_factory(),
            guest_id=guest_id,
            attending=draft.attending,
            party_size=draft.party_size,
            submitted_at=now,
            updated_at=now,
            attendees=list(draft.attendees),
            dietary_restrictions=dietary_restrictions,
            special_requests=special_requests,
            ip_address=draft.client.ip_address,
            user_agent=draft.client.user_agent,
        )
        return await self.write_model.create_rsvp(rsvp)
