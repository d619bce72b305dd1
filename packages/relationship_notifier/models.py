"""
Pydantic models for relationship edges and the events derived from them.

These models define the structure for:
- The state of the edge between the local user and one other account
- The user records the host caches for other accounts
- Transition events produced by diffing two relationship snapshots
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict


class RelationshipState(int, Enum):
    """Relationship codes as the host client stores them."""
    NONE = 0
    FRIEND = 1
    BLOCKED = 2
    PENDING_INCOMING = 3
    PENDING_OUTGOING = 4
    IMPLICIT = 5

    @classmethod
    def coerce(cls, value: Any) -> "RelationshipState":
        """
        Normalize a raw store value into a RelationshipState.

        Accepts a member, its integer code, or its name (any case).
        Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Not a relationship state: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise ValueError(f"Not a relationship state: {value!r}")


class TransitionKind(str, Enum):
    """How an identity's entry moved between two snapshots."""
    REMOVED = "removed"     # present before, absent now
    ADDED = "added"         # absent before, present now
    CHANGED = "changed"     # present in both with different states


class RelationshipAction(str, Enum):
    """Local mutations, valued by the host API's operation name."""
    REMOVE = "remove_relationship"
    ADD = "add_relationship"
    BLOCK = "block_user"
    UNBLOCK = "unblock_user"


# Identity -> state. Entries in state NONE are never stored.
Snapshot = Dict[str, RelationshipState]


class UserRecord(BaseModel):
    """
    A cached account record, owned by the host.

    Only the fields the notifier needs are modelled here.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    is_automated: bool = False


class TransitionEvent(BaseModel):
    """A single detected change for one counterpart identity."""
    model_config = ConfigDict(frozen=True)

    subject_id: str
    previous: Optional[RelationshipState] = None
    current: Optional[RelationshipState] = None
    kind: TransitionKind


def take_snapshot(raw: Mapping[str, Any]) -> Snapshot:
    """
    Copy a raw store mapping into a fresh snapshot.

    Values are coerced to RelationshipState and NONE entries are dropped,
    so an explicit NONE and a missing key compare equal.
    """
    snapshot: Snapshot = {}
    for identity, value in raw.items():
        state = RelationshipState.coerce(value)
        if state is RelationshipState.NONE:
            continue
        snapshot[str(identity)] = state
    return snapshot
