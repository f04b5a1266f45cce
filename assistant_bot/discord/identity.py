from __future__ import annotations

from dataclasses import dataclass

import discord


@dataclass(frozen=True)
class BotIdentity:
    """Who the bot logged in as. Captured once in on_ready."""

    id: int
    guild_count: int
    user_count: int

    @classmethod
    def from_client(cls, client: discord.Client) -> BotIdentity:
        return cls(
            id=client.user.id,
            guild_count=len(client.guilds),
            user_count=len(client.users),
        )
