"""
Notifier implementations.

The real toast surface belongs to the host; these cover logging, handing
messages to a host callback, and collecting them in memory.
"""

import logging
from typing import Callable, List, Optional

from .config import DEFAULT_TOAST_DURATION_MS

log = logging.getLogger("relationship-notifier.notifier")


class LoggingNotifier:
    """Writes every message to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or log
        self.level = level

    def notify(self, message: str) -> None:
        self.logger.log(self.level, message)


class CallbackNotifier:
    """
    Forwards messages to a host toast function.

    The callback is called as `callback(message, duration_ms=...)`.
    """

    def __init__(
        self,
        callback: Callable[..., object],
        duration_ms: int = DEFAULT_TOAST_DURATION_MS,
    ):
        if duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive, got {duration_ms}")
        self.callback = callback
        self.duration_ms = duration_ms

    def notify(self, message: str) -> None:
        self.callback(message, duration_ms=self.duration_ms)


class CollectingNotifier:
    """Keeps messages in a list, oldest first."""

    def __init__(self):
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()
