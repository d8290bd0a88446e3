"""
Trip lifecycle transition table

Each edge carries its own preconditions: whether the publication validator
must pass before the edge is taken, and whether a trip owner may trigger it
without Sentinel rights.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from motoroute.models.trip import TripStatus


@dataclass(frozen=True)
class Transition:
    source: TripStatus
    target: TripStatus
    requires_validation: bool = False
    owner_self_service: bool = True


_EDGES = (
    Transition(TripStatus.DRAFT, TripStatus.PENDING_REVIEW),
    Transition(TripStatus.DRAFT, TripStatus.PUBLISHED, requires_validation=True),
    Transition(TripStatus.PENDING_REVIEW, TripStatus.PUBLISHED, requires_validation=True),
    Transition(TripStatus.DRAFT, TripStatus.ARCHIVED),
    Transition(TripStatus.PENDING_REVIEW, TripStatus.ARCHIVED),
    Transition(TripStatus.PUBLISHED, TripStatus.ARCHIVED),
)

TRANSITIONS: Dict[Tuple[TripStatus, TripStatus], Transition] = {
    (edge.source, edge.target): edge for edge in _EDGES
}

TERMINAL_STATUSES: FrozenSet[TripStatus] = frozenset(
    status for status in TripStatus
    if not any(source == status for source, _ in TRANSITIONS)
)


def get_transition(source: TripStatus, target: TripStatus) -> Optional[Transition]:
    return TRANSITIONS.get((TripStatus(source), TripStatus(target)))


def can_transition(source: TripStatus, target: TripStatus) -> bool:
    return get_transition(source, target) is not None


def allowed_transitions(source: TripStatus) -> list[TripStatus]:
    """Target statuses reachable from ``source`` in one step, in table order"""
    return [edge.target for edge in _EDGES if edge.source == TripStatus(source)]
