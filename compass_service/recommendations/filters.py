"""
Candidate filtering by per-user event status.

Runs before reconciliation: events the user already decided on are not
offered as new recommendations.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from ..models import Event, EventStatus, UserEventStatus

DECIDED_STATUSES = frozenset({EventStatus.ATTENDED, EventStatus.SKIPPED})


def status_map(statuses: Iterable[UserEventStatus]) -> Dict[str, EventStatus]:
    """Index statuses by event ID; a later entry for the same event wins."""
    return {s.event_id: s.status for s in statuses}


def exclude_decided_events(
    events: Sequence[Event],
    statuses: Iterable[UserEventStatus],
    include_going: bool = False,
) -> List[Event]:
    """Drop attended and skipped events, and going events unless ``include_going``.

    Original order is preserved. Statuses for event IDs not in ``events`` are
    ignored.
    """
    excluded = set(DECIDED_STATUSES)
    if not include_going:
        excluded.add(EventStatus.GOING)

    by_event = status_map(statuses)
    return [e for e in events if by_event.get(e.id) not in excluded]


def next_status(current: Optional[EventStatus], requested: EventStatus) -> Optional[EventStatus]:
    """Status after the user picks ``requested``.

    Picking the current status again clears it back to undecided.
    """
    if current == requested:
        return None
    return requested


def can_rate(status: Optional[EventStatus]) -> bool:
    """Only attended events may be rated."""
    return status == EventStatus.ATTENDED
