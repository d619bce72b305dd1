"""
Relationship Notifier Package

Announces changes to the relationship edges between the local user and other
accounts: someone adds you as a friend, removes you, blocks or unblocks you.

Two paths feed the notifier:
- Store changes: the host's relationship cache is snapshotted, and every change
  notification is diffed against the last snapshot
- Local actions: the host's remove/add/block/unblock functions are wrapped so
  the user's own actions are announced immediately

Usage:
    from relationship_notifier import RelationshipWatcher, NotifierConfig, LoggingNotifier

    watcher = RelationshipWatcher(
        store=host.relationships,
        directory=host.users,
        session=host.session,
        notifier=LoggingNotifier(),
        config=NotifierConfig(ignore_bots=True),
        actions=host.relationship_actions,
    )
    watcher.activate()
    watcher.actions.block_user("1234")   # "You blocked ..."
    watcher.deactivate()
"""

from .config import NotifierConfig, NotifierSettings, get_settings, toggle_descriptors
from .diff import diff_snapshots
from .host import (
    Notifier,
    RelationshipActionsAPI,
    RelationshipSource,
    SessionProvider,
    SubscriptionHandle,
    UserDirectory,
)
from .interception import InterceptedActions, MutationInterceptor
from .memory import (
    InMemoryDirectory,
    InMemoryRelationshipActions,
    InMemoryRelationshipStore,
    StaticSession,
)
from .models import (
    RelationshipAction,
    RelationshipState,
    Snapshot,
    TransitionEvent,
    TransitionKind,
    UserRecord,
    take_snapshot,
)
from .notifier import CallbackNotifier, CollectingNotifier, LoggingNotifier
from .policy import evaluate_action, evaluate_transition, should_notify_about
from .watcher import RelationshipWatcher

__all__ = [
    # Models
    "RelationshipState",
    "RelationshipAction",
    "TransitionKind",
    "TransitionEvent",
    "UserRecord",
    "Snapshot",
    "take_snapshot",
    # Config
    "NotifierConfig",
    "NotifierSettings",
    "get_settings",
    "toggle_descriptors",
    # Core
    "diff_snapshots",
    "evaluate_transition",
    "evaluate_action",
    "should_notify_about",
    "MutationInterceptor",
    "InterceptedActions",
    "RelationshipWatcher",
    # Host interfaces
    "RelationshipSource",
    "UserDirectory",
    "SessionProvider",
    "Notifier",
    "RelationshipActionsAPI",
    "SubscriptionHandle",
    # Notifiers
    "LoggingNotifier",
    "CallbackNotifier",
    "CollectingNotifier",
    # In-memory host
    "InMemoryRelationshipStore",
    "InMemoryDirectory",
    "StaticSession",
    "InMemoryRelationshipActions",
]
