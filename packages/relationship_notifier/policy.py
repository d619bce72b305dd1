"""
Notification policy.

Decides, from the live NotifierConfig, whether a relationship change (or a
local action) should be announced and with what text.
"""

from typing import List, Optional

from .config import NotifierConfig
from .models import (
    RelationshipAction,
    RelationshipState,
    TransitionEvent,
    TransitionKind,
    UserRecord,
)

FRIEND = RelationshipState.FRIEND
BLOCKED = RelationshipState.BLOCKED

# action -> (toggle, message template)
ACTION_RULES = {
    RelationshipAction.REMOVE: ("notify_friend_removals", "You removed {name} as a friend."),
    RelationshipAction.ADD: ("notify_friend_adds", "You added {name} as a friend."),
    RelationshipAction.BLOCK: ("notify_blocks", "You blocked {name}."),
    RelationshipAction.UNBLOCK: ("notify_unblocks", "You unblocked {name}."),
}


def should_notify_about(subject: Optional[UserRecord], config: NotifierConfig) -> bool:
    """False when the user isn't cached yet, or is a bot and bots are ignored."""
    if subject is None:
        return False
    if subject.is_automated and config.ignore_bots:
        return False
    return True


def evaluate_transition(
    event: TransitionEvent,
    subject: Optional[UserRecord],
    config: NotifierConfig,
) -> List[str]:
    """
    Messages for one transition event, in rule order.

    Every rule is checked on its own, so BLOCKED -> FRIEND yields both the
    unblock and the friend-add message. A blocked entry that disappears
    altogether is not announced as an unblock.
    """
    if not should_notify_about(subject, config):
        return []

    name = subject.display_name
    previous, current = event.previous, event.current
    messages: List[str] = []

    if (
        event.kind is not TransitionKind.REMOVED
        and current == FRIEND
        and previous != FRIEND
        and config.notify_friend_adds
    ):
        messages.append(f"{name} added you as a friend.")

    if (
        event.kind is TransitionKind.REMOVED
        and previous == FRIEND
        and config.notify_friend_removals
    ):
        messages.append(f"{name} removed you as a friend.")

    if current == BLOCKED and previous != BLOCKED and config.notify_blocks:
        messages.append(f"{name} blocked you.")

    if (
        event.kind is not TransitionKind.REMOVED
        and previous == BLOCKED
        and current != BLOCKED
        and config.notify_unblocks
    ):
        messages.append(f"{name} unblocked you.")

    return messages


def evaluate_action(
    action: RelationshipAction,
    subject: Optional[UserRecord],
    config: NotifierConfig,
) -> Optional[str]:
    """
    Message for something the local user just did, or None.

    Only the lookup/bot filter and the action's own toggle apply here; there
    is no before/after state to compare.
    """
    if not should_notify_about(subject, config):
        return None

    toggle, template = ACTION_RULES[action]
    if not getattr(config, toggle):
        return None
    return template.format(name=subject.display_name)
