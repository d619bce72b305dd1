"""
Interception of local relationship mutations.

When the local user removes, adds, blocks or unblocks someone, the host's
relationship cache only catches up later. The interceptor wraps the host's
four mutation functions so the user gets a "You blocked X." style message
immediately, then calls the original function untouched.

The host API object is never modified. `wrap` returns a new handle whose
operations are the wrapped functions; `unwrap` hands back the original.

Usage:
    interceptor = MutationInterceptor(directory, notifier.notify, lambda: config, store_lookup)
    actions = interceptor.wrap(host_api)
    actions.block_user("1234")      # notifies, then calls host_api.block_user("1234")
    host_api = interceptor.unwrap()
"""

import functools
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

from .config import NotifierConfig
from .host import UserDirectory
from .models import RelationshipAction, RelationshipState
from .policy import evaluate_action

log = logging.getLogger("relationship-notifier.interception")


class InterceptedActions:
    """
    A host mutation API with some operations wrapped.

    Wrapped operations are plain attributes; anything else is looked up
    on the original API.
    """

    def __init__(self, original: Any, wrapped: Dict[str, Callable[..., Any]]):
        self.original = original
        self._wrapped = dict(wrapped)
        for name, fn in self._wrapped.items():
            setattr(self, name, fn)

    @property
    def wrapped_operations(self) -> List[str]:
        return list(self._wrapped)

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not set in __init__.
        if name in ("original", "_wrapped"):
            raise AttributeError(name)
        return getattr(self.original, name)

    def __repr__(self) -> str:
        return f"InterceptedActions({self.original!r}, wrapped={self.wrapped_operations})"


class MutationInterceptor:
    """
    Builds and releases wrapped mutation handles.

    Args:
        directory: user lookup
        notify: called with each message before the original runs
        get_config: returns the live NotifierConfig at call time
        get_state: current relationship state for an identity
        get_self_id: the local session identity, if known
    """

    def __init__(
        self,
        directory: UserDirectory,
        notify: Callable[[str], None],
        get_config: Callable[[], NotifierConfig],
        get_state: Callable[[str], RelationshipState],
        get_self_id: Optional[Callable[[], Optional[str]]] = None,
    ):
        self.directory = directory
        self.notify = notify
        self.get_config = get_config
        self.get_state = get_state
        self.get_self_id = get_self_id or (lambda: None)

        self._original: Any = None
        self._token: Optional[object] = None
        self._handle: Optional[InterceptedActions] = None

    @property
    def is_wrapped(self) -> bool:
        return self._handle is not None

    @property
    def handle(self) -> Optional[InterceptedActions]:
        return self._handle

    def wrap(self, api: Any) -> Optional[InterceptedActions]:
        """
        Wrap every mutation operation `api` exposes.

        Operations the API lacks are left out. Returns None when it has
        none of them. Calling again while wrapped returns the same handle.
        """
        if self._handle is not None:
            return self._handle
        if api is None:
            return None

        token = object()
        wrapped: Dict[str, Callable[..., Any]] = {}
        for action in RelationshipAction:
            original = getattr(api, action.value, None)
            if not callable(original):
                log.debug("Host API has no %s; not intercepting it", action.value)
                continue
            wrapped[action.value] = self._wrap_operation(action, original, token)

        if not wrapped:
            return None

        self._original = api
        self._token = token
        self._handle = InterceptedActions(api, wrapped)
        log.info("Intercepting %s", ", ".join(wrapped))
        return self._handle

    def unwrap(self) -> Any:
        """Release the wrapped handle and return the original API (None if never wrapped)."""
        original = self._original
        if self._handle is not None:
            log.info("Released interception of %s", ", ".join(self._handle.wrapped_operations))
        self._handle = None
        self._original = None
        self._token = None
        return original

    def _wrap_operation(
        self,
        action: RelationshipAction,
        original: Callable[..., Any],
        token: object,
    ) -> Callable[..., Any]:
        identity_param = _first_parameter(original)

        @functools.wraps(original)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            # A handle kept past unwrap() just calls through.
            if self._token is token:
                if args:
                    self._announce(action, args[0])
                elif identity_param is not None and identity_param in kwargs:
                    self._announce(action, kwargs[identity_param])
            return original(*args, **kwargs)

        return wrapper

    def _announce(self, action: RelationshipAction, identity: Any) -> None:
        identity = str(identity)
        if identity == self.get_self_id():
            return

        user = self.directory.lookup(identity)
        if user is None:
            log.debug("%s(%s): user not cached, no message", action.value, identity)
            return

        # Removing someone who isn't a friend changes nothing worth announcing.
        if action is RelationshipAction.REMOVE and self.get_state(identity) is not RelationshipState.FRIEND:
            return

        message = evaluate_action(action, user, self.get_config())
        if message is not None:
            self.notify(message)


def _first_parameter(fn: Callable[..., Any]) -> Optional[str]:
    """Name of the parameter the identity may be passed by keyword as, if any."""
    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return None
    for parameter in parameters:
        if parameter.kind in (parameter.POSITIONAL_OR_KEYWORD, parameter.KEYWORD_ONLY):
            return parameter.name
        if parameter.kind is parameter.VAR_POSITIONAL:
            return None
    return None
