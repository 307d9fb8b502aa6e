"""Guest name search.

Guests look themselves up on the public RSVP page by typing a name. Both the
query and every candidate name go through ``normalize_search_text`` so that
casing and spacing never affect the result. A candidate matches when it
contains the query outright, or when every query token is found inside some
candidate token, so "jess sahagian" finds the household "Jess & Evan Sahagian".
"""

from collections.abc import Iterable

from src.guests.dtos import GuestDTO


def normalize_search_text(value: str | None) -> str:
    """Lowercase, trim and collapse runs of whitespace to a single space."""
    if not value:
        return ""
    return " ".join(value.split()).lower()


def search_tokens(value: str) -> list[str]:
    """Split on every character that is neither a letter nor a digit."""
    tokens = []
    current = []
    for char in value:
        if char.isalnum():
            current.append(char)
        elif current:
            tokens.append("".join(current))
            current = []
    if current:
        tokens.append("".join(current))
    return tokens


def search_text_matches(candidate: str | None, normalized_query: str) -> bool:
    normalized_candidate = normalize_search_text(candidate)
    if not normalized_candidate or not normalized_query:
        return False

    if normalized_query in normalized_candidate:
        return True

    candidate_tokens = search_tokens(normalized_candidate)
    query_tokens = search_tokens(normalized_query)
    if not candidate_tokens or not query_tokens:
        return False

    return all(
        any(query_token in candidate_token for candidate_token in candidate_tokens)
        for query_token in query_tokens
    )


def guest_matches_query(guest: GuestDTO | None, normalized_query: str) -> bool:
    if guest is None:
        return False

    if search_text_matches(guest.primary_guest, normalized_query):
        return True

    return any(search_text_matches(member, normalized_query) for member in guest.household_members)


def search_guests(guests: Iterable[GuestDTO | None], name: str | None) -> list[GuestDTO]:
    """Full scan over ``guests``. A blank query matches nothing."""
    query = normalize_search_text(name)
    if not query:
        return []
    return [guest for guest in guests if guest_matches_query(guest, query)]
