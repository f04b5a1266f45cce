from __future__ import annotations

from dataclasses import dataclass, field
import enum
from typing import Any

import discord


class ReplyState(enum.Enum):
    UNSENT = "unsent"
    DEFERRED = "deferred"
    REPLIED = "replied"


class ReplyStateError(RuntimeError):
    """An interaction reply was attempted out of order (e.g. a second reply)."""


@dataclass
class InteractionContext:
    """
    Per-interaction state owned by the dispatcher.

    Enforces the reply lifecycle  unsent → (reply | defer → edit) → replied,
    so a handler cannot answer the same interaction twice.
    """

    interaction: discord.Interaction
    command_name: str
    options: dict[str, Any] = field(default_factory=dict)
    reply_state: ReplyState = ReplyState.UNSENT

    @property
    def done(self) -> bool:
        return self.reply_state is ReplyState.REPLIED

    def get_string(self, name: str, default: str | None = None) -> str | None:
        value = self.options.get(name)
        return value if isinstance(value, str) else default

    def get_boolean(self, name: str, default: bool | None = None) -> bool | None:
        value = self.options.get(name)
        return value if isinstance(value, bool) else default

    async def reply(self, content: str | None = None, *, embed: discord.Embed | None = None) -> None:
        if self.reply_state is not ReplyState.UNSENT:
            raise ReplyStateError(f"cannot reply to '{self.command_name}' in state {self.reply_state.value}")
        kwargs: dict[str, Any] = {}
        if embed is not None:
            kwargs["embed"] = embed
        await self.interaction.response.send_message(content, **kwargs)
        self.reply_state = ReplyState.REPLIED

    async def defer(self) -> None:
        if self.reply_state is not ReplyState.UNSENT:
            raise ReplyStateError(f"cannot defer '{self.command_name}' in state {self.reply_state.value}")
        await self.interaction.response.defer()
        self.reply_state = ReplyState.DEFERRED

    async def edit(self, content: str) -> None:
        if self.reply_state is not ReplyState.DEFERRED:
            raise ReplyStateError(f"cannot edit '{self.command_name}' in state {self.reply_state.value}")
        await self.interaction.edit_original_response(content=content)
        self.reply_state = ReplyState.REPLIED
