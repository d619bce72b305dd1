"""
Snapshot diffing.

Compares the last observed relationship snapshot against a fresh one and
classifies every difference into a TransitionEvent. No user lookups happen
here; the policy layer resolves users per event.
"""

from typing import Dict, List, Mapping, Optional

from .models import RelationshipState, TransitionEvent, TransitionKind


def diff_snapshots(
    old: Mapping[str, RelationshipState],
    new: Mapping[str, RelationshipState],
    self_id: Optional[str],
) -> List[TransitionEvent]:
    """
    Produce the transition events between two snapshots.

    Removed entries come first, in `old` order, followed by added and
    changed entries in `new` order. Entries keyed by `self_id` are skipped,
    and an entry in state NONE counts as absent.

    A move between two non-NONE states (FRIEND -> BLOCKED, say) is a single
    CHANGED event. Several notification rules may match that one event.
    """
    old = _present(old)
    new = _present(new)
    events: List[TransitionEvent] = []

    for identity, previous in old.items():
        if identity == self_id or identity in new:
            continue
        events.append(TransitionEvent(
            subject_id=identity,
            previous=previous,
            current=None,
            kind=TransitionKind.REMOVED,
        ))

    for identity, current in new.items():
        if identity == self_id:
            continue
        previous = old.get(identity)
        if previous == current:
            continue
        events.append(TransitionEvent(
            subject_id=identity,
            previous=previous,
            current=current,
            kind=TransitionKind.ADDED if previous is None else TransitionKind.CHANGED,
        ))

    return events


def _present(snapshot: Mapping[str, RelationshipState]) -> Dict[str, RelationshipState]:
    return {
        identity: state
        for identity, state in snapshot.items()
        if state is not None and state != RelationshipState.NONE
    }
