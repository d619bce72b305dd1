"""
RelationshipWatcher - ties the store, diffing, policy and interception together.

On activate it snapshots the host's relationship cache, subscribes to its
change notifications and (when the host exposes them) wraps the mutation
functions. Every change notification is diffed against the snapshot, each
resulting event is run through the policy, accepted messages go to the
notifier, and the snapshot is replaced with the fresh state.

Known overlap: a wrapped mutation announces the action first and then calls
the host. If the host updates its cache synchronously inside that call, the
change handler runs nested and can announce the same change again from the
other side ("You blocked X." then "X blocked you."). That is left as is.
"""

import logging
from typing import Any, Dict, List, Optional

from .config import NotifierConfig
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
from .models import RelationshipState, Snapshot, take_snapshot
from .policy import evaluate_transition

log = logging.getLogger("relationship-notifier.watcher")


class RelationshipWatcher:
    """
    Watches relationship changes and announces them.

    Args:
        store: the host relationship cache
        directory: user lookup
        session: provides the local user's identity
        notifier: receives the final messages
        config: live toggles, read at every decision (defaults to NotifierConfig())
        actions: the host's mutation API, if it has one
    """

    def __init__(
        self,
        store: RelationshipSource,
        directory: UserDirectory,
        session: SessionProvider,
        notifier: Notifier,
        config: Optional[NotifierConfig] = None,
        actions: Optional[RelationshipActionsAPI] = None,
    ):
        self.store = store
        self.directory = directory
        self.session = session
        self.notifier = notifier
        self.config = config if config is not None else NotifierConfig()

        self._host_actions = actions
        self._interceptor = MutationInterceptor(
            directory=directory,
            notify=self.notify,
            get_config=lambda: self.config,
            get_state=self._current_state,
            get_self_id=self._self_id,
        )

        self._snapshot: Snapshot = {}
        self._subscription: Optional[SubscriptionHandle] = None
        self._active = False

    # ==================== Lifecycle ====================

    @property
    def is_active(self) -> bool:
        return self._active

    def activate(self) -> None:
        """Start watching. Does nothing if already active."""
        if self._active:
            return

        self._snapshot = take_snapshot(self.store.get_all())
        self._subscription = self.store.subscribe(self.on_relationships_changed)

        if self._interceptor.wrap(self._host_actions) is None:
            log.info("Relationship mutation API not available; watching store changes only")

        self._active = True
        log.info("Watching %d relationships", len(self._snapshot))

    def deactivate(self) -> None:
        """Stop watching. Safe to call repeatedly or before activate()."""
        if self._subscription is not None:
            self.store.unsubscribe(self._subscription)
            self._subscription = None

        self._interceptor.unwrap()
        self._snapshot = {}

        if self._active:
            self._active = False
            log.info("Stopped watching relationships")

    # ==================== Change handling ====================

    def on_relationships_changed(self) -> List[str]:
        """
        Handle one change notification from the store.

        Returns the messages that were emitted.
        """
        if not self._active:
            log.debug("Change notification while inactive; ignored")
            return []

        fresh = take_snapshot(self.store.get_all())
        events = diff_snapshots(self._snapshot, fresh, self._self_id())

        emitted: List[str] = []
        for event in events:
            subject = self.directory.lookup(event.subject_id)
            if subject is None:
                log.debug("No cached user for %s; skipping %s", event.subject_id, event.kind.value)
            for message in evaluate_transition(event, subject, self.config):
                self.notify(message)
                emitted.append(message)

        self._snapshot = fresh
        log.debug("Processed %d relationship events, %d messages", len(events), len(emitted))
        return emitted

    # ==================== Accessors ====================

    @property
    def snapshot(self) -> Dict[str, RelationshipState]:
        """A copy of the last processed snapshot."""
        return dict(self._snapshot)

    @property
    def actions(self) -> Any:
        """The wrapped mutation API while intercepting, otherwise the host's own."""
        handle: Optional[InterceptedActions] = self._interceptor.handle
        if handle is not None:
            return handle
        return self._host_actions

    def notify(self, message: str) -> None:
        """Send one message to the notifier. Notifier failures are logged, not raised."""
        try:
            self.notifier.notify(message)
        except Exception:
            log.exception("Notifier failed for message %r", message)

    # ==================== Helpers ====================

    def _self_id(self) -> Optional[str]:
        identity = self.session.current_identity()
        return str(identity) if identity is not None else None

    def _current_state(self, identity: str) -> RelationshipState:
        return take_snapshot(self.store.get_all()).get(str(identity), RelationshipState.NONE)
