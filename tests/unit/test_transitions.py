import pytest

from motoroute.models.trip import TripStatus
from motoroute.services.transitions import (
    TERMINAL_STATUSES,
    allowed_transitions,
    can_transition,
    get_transition,
)


@pytest.mark.parametrize(
    "source,target",
    [
        (TripStatus.DRAFT, TripStatus.PENDING_REVIEW),
        (TripStatus.DRAFT, TripStatus.PUBLISHED),
        (TripStatus.PENDING_REVIEW, TripStatus.PUBLISHED),
        (TripStatus.DRAFT, TripStatus.ARCHIVED),
        (TripStatus.PENDING_REVIEW, TripStatus.ARCHIVED),
        (TripStatus.PUBLISHED, TripStatus.ARCHIVED),
    ],
)
def test_defined_edges(source, target):
    assert can_transition(source, target)


@pytest.mark.parametrize(
    "source,target",
    [
        (TripStatus.PUBLISHED, TripStatus.DRAFT),
        (TripStatus.PUBLISHED, TripStatus.PUBLISHED),
        (TripStatus.PENDING_REVIEW, TripStatus.DRAFT),
        (TripStatus.ARCHIVED, TripStatus.DRAFT),
        (TripStatus.ARCHIVED, TripStatus.PUBLISHED),
        (TripStatus.DRAFT, TripStatus.DRAFT),
    ],
)
def test_undefined_edges(source, target):
    assert get_transition(source, target) is None
    assert not can_transition(source, target)


def test_only_publication_edges_require_validation():
    gated = {
        (s, t)
        for s in TripStatus
        for t in TripStatus
        if get_transition(s, t) is not None and get_transition(s, t).requires_validation
    }
    assert gated == {
        (TripStatus.DRAFT, TripStatus.PUBLISHED),
        (TripStatus.PENDING_REVIEW, TripStatus.PUBLISHED),
    }


def test_archived_is_the_only_terminal_status():
    assert TERMINAL_STATUSES == frozenset({TripStatus.ARCHIVED})
    assert allowed_transitions(TripStatus.ARCHIVED) == []


def test_transitions_accept_raw_tokens():
    assert can_transition("Bozza", "Pubblicato")
    assert allowed_transitions("Pubblicato") == [TripStatus.ARCHIVED]
