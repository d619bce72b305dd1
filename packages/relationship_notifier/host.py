"""
Interfaces of the host collaborators the notifier reads from and calls into.

The host owns the relationship cache, the user cache, the session and the
toast surface. The notifier only sees them through these protocols.
"""

from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from .models import UserRecord

ChangeCallback = Callable[[], None]


class SubscriptionHandle(BaseModel):
    """Returned by `subscribe`, handed back to `unsubscribe`."""
    model_config = ConfigDict(frozen=True)

    id: int
    source_name: str = "relationships"


@runtime_checkable
class RelationshipSource(Protocol):
    """The host's relationship cache."""

    def get_all(self) -> Mapping[str, Any]:
        """Current identity -> relationship code mapping."""
        ...

    def subscribe(self, callback: ChangeCallback) -> SubscriptionHandle:
        ...

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Must be a no-op for unknown or already released handles."""
        ...


@runtime_checkable
class UserDirectory(Protocol):
    def lookup(self, identity: str) -> Optional[UserRecord]:
        ...


@runtime_checkable
class SessionProvider(Protocol):
    def current_identity(self) -> str:
        ...


@runtime_checkable
class Notifier(Protocol):
    def notify(self, message: str) -> None:
        ...


class RelationshipActionsAPI(Protocol):
    """
    The host's relationship mutation functions.

    Each takes the counterpart identity first; the rest is host-specific.
    Results may be plain values or awaitables.
    """

    def remove_relationship(self, identity: str, *args: Any, **kwargs: Any) -> Any:
        ...

    def add_relationship(self, identity: str, *args: Any, **kwargs: Any) -> Any:
        ...

    def block_user(self, identity: str, *args: Any, **kwargs: Any) -> Any:
        ...

    def unblock_user(self, identity: str, *args: Any, **kwargs: Any) -> Any:
        ...
