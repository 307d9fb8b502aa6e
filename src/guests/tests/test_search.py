from itertools import product

import pytest

from src.guests.search import (
    guest_matches_query,
    normalize_search_text,
    search_guests,
    search_text_matches,
    search_tokens,
)
from src.guests.repository.tests.inmemory_models import make_guest


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Jess   &  Evan ", "jess & evan"),
        ("SAHAGIAN", "sahagian"),
        ("\tMaria\nLopez ", "maria lopez"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_search_text(raw, expected):
    assert normalize_search_text(raw) == expected


FRAGMENTS = ["", " ", "\t", "\n ", "Jess", "ÉVAN", "&", "O'Brien-Smith", "  José  ", "42"]

# every string of up to three fragments
SAMPLES = sorted(
    {"".join(parts) for size in range(4) for parts in product(FRAGMENTS, repeat=size)}
)


@pytest.mark.parametrize("first", FRAGMENTS)
def test_normalize_search_text_properties(first):
    for raw in (sample for sample in SAMPLES if sample.startswith(first)):
        once = normalize_search_text(raw)

        assert normalize_search_text(once) == once, raw
        assert once == once.strip(), raw
        assert "  " not in once, raw
        assert once == once.lower(), raw
        assert not any(char.isspace() and char != " " for char in once), raw
        assert once.split() == raw.lower().split(), raw


@pytest.mark.parametrize("first", FRAGMENTS)
def test_search_tokens_properties(first):
    for raw in (sample for sample in SAMPLES if sample.startswith(first)):
        normalized = normalize_search_text(raw)
        tokens = search_tokens(normalized)

        assert all(token and token.isalnum() for token in tokens), raw
        assert "".join(tokens) == "".join(char for char in normalized if char.isalnum()), raw
        if tokens:
            # a non-empty name always finds itself
            assert search_text_matches(raw, normalized), raw


def test_search_tokens_split_on_punctuation():
    assert search_tokens("jess & evan sahagian") == ["jess", "evan", "sahagian"]
    assert search_tokens("o'brien-smith") == ["o", "brien", "smith"]
    assert search_tokens("josé garcía") == ["josé", "garcía"]
    assert search_tokens("&&") == []


def test_contiguous_substring_matches():
    assert search_text_matches("Jess & Evan Sahagian", "evan sah")


def test_every_query_token_must_be_found():
    """Tokens may appear in any order, but all of them must be present."""
    assert search_text_matches("Jess & Evan Sahagian", "sahagian jess")
    assert not search_text_matches("Jess & Evan Sahagian", "jess lopez")


def test_token_can_be_a_prefix_of_a_candidate_token():
    assert search_text_matches("Jess & Evan Sahagian", "jes saha")


def test_empty_inputs_never_match():
    assert not search_text_matches("", "jess")
    assert not search_text_matches(None, "jess")
    assert not search_text_matches("Jess", "")


def test_query_of_only_punctuation_does_not_match_by_tokens():
    assert not search_text_matches("Jess Evan", "& -")


def test_guest_matches_on_primary_name():
    guest = make_guest()
    assert guest_matches_query(guest, "jess sahagian")
    assert guest_matches_query(guest, "evan sahagian")
    assert not guest_matches_query(guest, "maria lopez")


def test_guest_matches_on_household_member():
    guest = make_guest(primary_guest="The Lopez Family", household_members=["Maria Lopez", "Ana"])
    assert guest_matches_query(guest, "ana")
    assert guest_matches_query(guest, normalize_search_text("  MARIA   Lopez"))


def test_missing_guest_never_matches():
    assert not guest_matches_query(None, "jess")


def test_search_guests_scans_everyone():
    sahagians = make_guest(invitation_code="AAAA2222")
    lopez = make_guest(primary_guest="Maria Lopez", invitation_code="BBBB3333")
    evans = make_guest(primary_guest="Evan Thomas", invitation_code="CCCC4444")

    found = search_guests([sahagians, None, lopez, evans], "  EVAN ")

    assert found == [sahagians, evans]


@pytest.mark.parametrize("query", ["", "   ", None])
def test_search_guests_with_blank_query_returns_nothing(query):
    assert search_guests([make_guest()], query) == []
