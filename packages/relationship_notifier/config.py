"""
Notification toggles.

NotifierConfig is the live object the watcher reads at every decision point.
An external settings editor may flip its fields at any time; nothing in this
package keeps a copy of a toggle across events.

NotifierSettings supplies the startup values from the environment
(RELATIONSHIP_NOTIFIER_* variables or a .env file).
"""

from functools import lru_cache
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TOAST_DURATION_MS = 5000


class NotifierConfig(BaseModel):
    """User-editable notification toggles."""
    model_config = ConfigDict(validate_assignment=True)

    notify_friend_adds: bool = Field(
        default=True,
        title="Friend Adds",
        description="Notify when someone adds you as a friend",
    )
    notify_friend_removals: bool = Field(
        default=True,
        title="Friend Removals",
        description="Notify when someone removes you as a friend",
    )
    notify_blocks: bool = Field(
        default=True,
        title="Blocks",
        description="Notify when someone blocks you",
    )
    notify_unblocks: bool = Field(
        default=True,
        title="Unblocks",
        description="Notify when someone unblocks you",
    )
    ignore_bots: bool = Field(
        default=False,
        title="Ignore Bots",
        description="Don't notify for bot account changes",
    )


def toggle_descriptors() -> List[Tuple[str, str, str]]:
    """
    (field, label, hint) for each toggle, in display order.

    Used by whatever renders the settings page; this package never does.
    """
    return [
        (name, field.title or name, field.description or "")
        for name, field in NotifierConfig.model_fields.items()
    ]


class NotifierSettings(BaseSettings):
    """Startup defaults for the notifier."""
    notify_friend_adds: bool = True
    notify_friend_removals: bool = True
    notify_blocks: bool = True
    notify_unblocks: bool = True
    ignore_bots: bool = False

    toast_duration_ms: int = Field(default=DEFAULT_TOAST_DURATION_MS, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="RELATIONSHIP_NOTIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def to_config(self) -> NotifierConfig:
        """Build a live config seeded from these settings."""
        return NotifierConfig(
            notify_friend_adds=self.notify_friend_adds,
            notify_friend_removals=self.notify_friend_removals,
            notify_blocks=self.notify_blocks,
            notify_unblocks=self.notify_unblocks,
            ignore_bots=self.ignore_bots,
        )


@lru_cache(maxsize=1)
def get_settings() -> NotifierSettings:
    """Get or create the process-wide settings instance."""
    return NotifierSettings()
