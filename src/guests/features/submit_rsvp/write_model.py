"""Write model for submitting RSVPs.

Looks up the guest, validates the attendees against the guest's party limit
and hands the result to the reconciler. Returns DTOs instead of ORM models.
"""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from src.guests.dtos import (
    ClientMetadataDTO,
    GuestNotFoundError,
    RSVPConflictError,
    RSVPDraftDTO,
    RSVPResponseDTO,
    RSVPSubmissionDTO,
    RSVPValidationError,
)
from src.guests.features.submit_rsvp.reconciler import RSVPReconciler
from src.guests.features.submit_rsvp.validation import validate_attendees
from src.guests.repository.read_models import GuestReadModel

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "RSVP submitted successfully"


class SubmitRSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(
        self,
        submission: RSVPSubmissionDTO,
        client: ClientMetadataDTO | None = None,
    ) -> RSVPResponseDTO:
        """Store a guest's response, replacing any earlier one.

        Raises:
            RSVPValidationError: blank guest id or an attendee rule is broken
            GuestNotFoundError: no guest with that id
            RSVPConflictError: a concurrent write won twice in a row
        """
        raise NotImplementedError


class RepositorySubmitRSVPWriteModel(SubmitRSVPWriteModel):
    """Submits RSVPs through the guest read model and an RSVP reconciler."""

    max_attempts = 2

    def __init__(self, guest_read_model: GuestReadModel, reconciler: RSVPReconciler) -> None:
        self.guest_read_model = guest_read_model
        self.reconciler = reconciler

    async def submit_rsvp(
        self,
        submission: RSVPSubmissionDTO,
        client: ClientMetadataDTO | None = None,
    ) -> RSVPResponseDTO:
        raw_guest_id = (submission.guest_id or "").strip()
        if not raw_guest_id:
            raise RSVPValidationError("Guest ID is required")

        try:
            guest_id = UUID(raw_guest_id)
        except ValueError:
            logger.warning("RSVP submitted for malformed guest id %r", raw_guest_id)
            raise GuestNotFoundError(raw_guest_id) from None

        guest = await self.guest_read_model.get_guest(guest_id)
        if guest is None:
            logger.warning("RSVP submitted for unknown guest %s", guest_id)
            raise GuestNotFoundError(raw_guest_id)

        attendees, party_size = validate_attendees(submission, guest.max_party_size)
        draft = RSVPDraftDTO(
            attending=submission.attending,
            party_size=party_size,
            attendees=attendees,
            dietary_restrictions=list(submission.dietary_restrictions),
            special_requests=submission.special_requests or "",
            client=client or ClientMetadataDTO(),
        )

        for attempt in range(1, self.max_attempts + 1):
            try:
                rsvp = await self.reconciler.reconcile(guest.id, draft)
                break
            except RSVPConflictError:
                if attempt == self.max_attempts:
                    logger.error("RSVP for guest %s still conflicting, giving up", guest.id)
                    raise
                logger.warning("RSVP for guest %s conflicted, retrying", guest.id)

        logger.info(
            "RSVP saved for %s: attending=%s party_size=%s",
            guest.primary_guest,
            rsvp.attending,
            rsvp.party_size,
        )
        return RSVPResponseDTO(message=SUCCESS_MESSAGE, attending=rsvp.attending, rsvp=rsvp)
