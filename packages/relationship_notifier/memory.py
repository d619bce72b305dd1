"""
In-memory host.

A small stand-in for the host client: a relationship cache that calls its
subscribers synchronously on every write, a user directory, a fixed session
and a mutation API that writes through to the cache.
"""

import itertools
import logging
from typing import Any, Dict, Mapping, Optional

from .host import ChangeCallback, SubscriptionHandle
from .models import RelationshipState, UserRecord

log = logging.getLogger("relationship-notifier.memory")


class InMemoryRelationshipStore:
    """
    Relationship cache keyed by counterpart identity.

    Every write calls the subscribers once, after the write is applied,
    in subscription order.
    """

    def __init__(
        self,
        relationships: Optional[Mapping[str, Any]] = None,
        name: str = "relationships",
    ):
        self.name = name
        self._relationships: Dict[str, RelationshipState] = {}
        self._listeners: Dict[int, ChangeCallback] = {}
        self._ids = itertools.count(1)

        for identity, value in (relationships or {}).items():
            self._relationships[identity] = RelationshipState.coerce(value)

    # ==================== Reads ====================

    def get_all(self) -> Dict[str, RelationshipState]:
        """A copy of the current relationships."""
        return dict(self._relationships)

    def get_relationship_type(self, identity: str) -> RelationshipState:
        return self._relationships.get(identity, RelationshipState.NONE)

    # ==================== Writes ====================

    def set_relationship(self, identity: str, state: Any) -> None:
        state = RelationshipState.coerce(state)
        if state is RelationshipState.NONE:
            self._relationships.pop(identity, None)
        else:
            self._relationships[identity] = state
        self.emit_change()

    def remove_relationship(self, identity: str) -> bool:
        """Delete an entry. Returns False (and stays silent) if absent."""
        if identity not in self._relationships:
            return False
        del self._relationships[identity]
        self.emit_change()
        return True

    def replace_all(self, relationships: Mapping[str, Any]) -> None:
        """Swap in a whole new mapping, as a full sync from the server would."""
        self._relationships = {
            identity: RelationshipState.coerce(value)
            for identity, value in relationships.items()
        }
        self.emit_change()

    # ==================== Subscriptions ====================

    def subscribe(self, callback: ChangeCallback) -> SubscriptionHandle:
        handle = SubscriptionHandle(id=next(self._ids), source_name=self.name)
        self._listeners[handle.id] = callback
        return handle

    def unsubscribe(self, handle: Optional[SubscriptionHandle]) -> None:
        if handle is None or handle.source_name != self.name:
            return
        self._listeners.pop(handle.id, None)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit_change(self) -> None:
        # Listeners may unsubscribe while being called.
        for callback in list(self._listeners.values()):
            callback()


class InMemoryDirectory:
    """User cache."""

    def __init__(self, *users: UserRecord):
        self._users: Dict[str, UserRecord] = {user.id: user for user in users}

    def add_user(self, user: UserRecord) -> UserRecord:
        self._users[user.id] = user
        return user

    def remove_user(self, identity: str) -> bool:
        return self._users.pop(identity, None) is not None

    def lookup(self, identity: str) -> Optional[UserRecord]:
        return self._users.get(identity)


class StaticSession:
    """Session whose identity is fixed (or changed by hand)."""

    def __init__(self, identity: str):
        self.identity = identity

    def current_identity(self) -> str:
        return self.identity


class InMemoryRelationshipActions:
    """
    Relationship mutations that write straight into an InMemoryRelationshipStore.

    Writes fire the store's listeners before the call returns, the same
    way a host that applies optimistic updates would.
    """

    def __init__(self, store: InMemoryRelationshipStore):
        self.store = store

    def remove_relationship(self, identity: str, *args: Any, **kwargs: Any) -> bool:
        return self.store.remove_relationship(identity)

    def add_relationship(self, identity: str, *args: Any, **kwargs: Any) -> RelationshipState:
        self.store.set_relationship(identity, RelationshipState.FRIEND)
        return RelationshipState.FRIEND

    def block_user(self, identity: str, *args: Any, **kwargs: Any) -> RelationshipState:
        self.store.set_relationship(identity, RelationshipState.BLOCKED)
        return RelationshipState.BLOCKED

    def unblock_user(self, identity: str, *args: Any, **kwargs: Any) -> bool:
        if self.store.get_relationship_type(identity) is not RelationshipState.BLOCKED:
            log.debug("unblock_user(%s): not blocked", identity)
            return False
        return self.store.remove_relationship(identity)
