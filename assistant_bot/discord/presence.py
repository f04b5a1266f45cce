from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Mapping

import discord


ACTIVITY_TYPES: dict[str, discord.ActivityType] = {
    "playing": discord.ActivityType.playing,
    "streaming": discord.ActivityType.streaming,
    "listening": discord.ActivityType.listening,
    "watching": discord.ActivityType.watching,
    "competing": discord.ActivityType.competing,
}

STATUS_TYPES: dict[str, discord.Status] = {
    "online": discord.Status.online,
    "idle": discord.Status.idle,
    "dnd": discord.Status.dnd,
    "invisible": discord.Status.invisible,
}

DEFAULT_ACTIVITY = "watching"
DEFAULT_STATUS = "online"

# Gateway client properties of the official iOS app. Discord reads these only
# from IDENTIFY, so they are recorded on AppliedPresence and never sent with a
# presence update.
MOBILE_PLATFORM: Mapping[str, str] = {"os": "iOS", "browser": "Discord iOS", "device": "iPhone"}


@dataclass(frozen=True)
class PresenceConfig:
    activity_kind: str = DEFAULT_ACTIVITY
    activity_text: str = "for commands"
    online_status: str = DEFAULT_STATUS
    mobile: bool = False


@dataclass(frozen=True)
class AppliedPresence:
    activity_kind: str
    activity_text: str
    online_status: str
    mobile: bool
    # Set when mobile was requested; not part of the change_presence() call
    platform: Mapping[str, str] | None = None

    def describe(self) -> str:
        suffix = " (mobile)" if self.mobile else ""
        return f"{self.online_status} | {self.activity_kind} {self.activity_text}{suffix}"


def resolve_activity_type(kind: str | None) -> tuple[str, discord.ActivityType]:
    key = (kind or "").lower()
    if key not in ACTIVITY_TYPES:
        key = DEFAULT_ACTIVITY
    return key, ACTIVITY_TYPES[key]


def resolve_status(status: str | None) -> tuple[str, discord.Status]:
    key = (status or "").lower()
    if key not in STATUS_TYPES:
        key = DEFAULT_STATUS
    return key, STATUS_TYPES[key]


class PresenceManager:
    """Publishes PresenceConfig values through the bot's gateway connection."""

    def __init__(self, client: discord.Client):
        self.client = client

    def build(self, cfg: PresenceConfig) -> tuple[AppliedPresence, dict[str, Any]]:
        """
        Resolve a config into the applied state and the change_presence() kwargs.
        Pure; no gateway traffic.
        """
        kind, activity_type = resolve_activity_type(cfg.activity_kind)
        status_name, status = resolve_status(cfg.online_status)

        applied = AppliedPresence(
            activity_kind=kind,
            activity_text=cfg.activity_text,
            online_status=status_name,
            mobile=cfg.mobile,
            platform=dict(MOBILE_PLATFORM) if cfg.mobile else None,
        )
        kwargs = {
            "activity": discord.Activity(type=activity_type, name=cfg.activity_text),
            "status": status,
        }
        return applied, kwargs

    async def apply(self, cfg: PresenceConfig) -> AppliedPresence:
        applied, kwargs = self.build(cfg)
        await self.client.change_presence(**kwargs)
        logging.info(f"🎭 Status set to: {applied.describe()}")
        return applied
