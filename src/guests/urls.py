RSVP_PREFIX = "/api/v1/rsvp"

SEARCH_GUESTS_URL = f"{RSVP_PREFIX}/search"
GET_GUEST_INFO_URL = f"{RSVP_PREFIX}/guests/{{guest_id}}"
GET_INVITATION_URL = f"{RSVP_PREFIX}/invitations/{{code}}"
SUBMIT_RSVP_URL = RSVP_PREFIX
