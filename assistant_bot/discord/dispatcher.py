from __future__ import annotations

import logging
import math
from typing import Any, Awaitable, Callable, Sequence

import discord
from discord import app_commands

from ..config.loader import BotSettings
from ..llm.completion import CompletionClient
from .commands import CommandSpec
from .context import InteractionContext, ReplyStateError
from .errors import send_error_reply
from .presence import PresenceConfig, PresenceManager


MAX_MESSAGE_LENGTH = 2000
HELP_EMBED_COLOR = 0x0099FF
HELP_FOOTER = "Made with ❤️ using discord.py"
SAY_MARKER = "📢 "
AI_RESPONSE_HEADER = "🤖 **AI Response:**\n"
UNKNOWN_COMMAND_MESSAGE = "❓ Unknown command."
# Shown as the API latency before the gateway has measured a heartbeat
UNKNOWN_LATENCY = -1

COMMAND_ICONS = {
    "ping": "🏓",
    "help": "❓",
    "ai": "🤖",
    "status": "🎭",
    "say": "💬",
}

Handler = Callable[["Dispatcher", InteractionContext], Awaitable[None]]


# ── Handlers ────────────────────────────────────────────────────────────────

async def handle_ping(dispatcher: Dispatcher, ctx: InteractionContext) -> None:
    elapsed = discord.utils.utcnow() - ctx.interaction.created_at
    ping = round(elapsed.total_seconds() * 1000)
    latency = dispatcher.client.latency
    api_ping = round(latency * 1000) if math.isfinite(latency) else UNKNOWN_LATENCY
    await ctx.reply(f"🏓 Pong! Latency: {ping}ms | API Latency: {api_ping}ms")


async def handle_help(dispatcher: Dispatcher, ctx: InteractionContext) -> None:
    await ctx.reply(embed=dispatcher.build_help_embed())


async def handle_ai(dispatcher: Dispatcher, ctx: InteractionContext) -> None:
    question = ctx.get_string("question", "")
    # The upstream call can outlast Discord's 3 second initial-response window
    await ctx.defer()
    answer = await dispatcher.completion.ask(question)
    await ctx.edit((AI_RESPONSE_HEADER + answer)[:MAX_MESSAGE_LENGTH])


async def handle_status(dispatcher: Dispatcher, ctx: InteractionContext) -> None:
    cfg = PresenceConfig(
        activity_kind=ctx.get_string("type", ""),
        activity_text=ctx.get_string("text", ""),
        online_status=ctx.get_string("presence") or "online",
        mobile=ctx.get_boolean("mobile", False),
    )
    applied = await dispatcher.presence.apply(cfg)
    mobile_text = " with mobile indicator" if applied.mobile else ""
    await ctx.reply(
        f"✅ Status updated: {applied.activity_kind} {applied.activity_text} "
        f"({applied.online_status}){mobile_text}"
    )


async def handle_say(dispatcher: Dispatcher, ctx: InteractionContext) -> None:
    await ctx.reply(SAY_MARKER + ctx.get_string("message", ""))


HANDLERS: dict[str, Handler] = {
    "ping": handle_ping,
    "help": handle_help,
    "ai": handle_ai,
    "status": handle_status,
    "say": handle_say,
}


# ── Dispatcher ──────────────────────────────────────────────────────────────

class Dispatcher:
    """Routes application-command interactions to HANDLERS by exact name."""

    def __init__(
        self,
        client: discord.Client,
        completion: CompletionClient,
        presence: PresenceManager,
        settings: BotSettings,
        specs: Sequence[CommandSpec],
        handlers: dict[str, Handler] | None = None,
    ):
        self.client = client
        self.completion = completion
        self.presence = presence
        self.settings = settings
        self.specs = tuple(specs)
        self.handlers = dict(HANDLERS if handlers is None else handlers)

    def build_help_embed(self) -> discord.Embed:
        embed = discord.Embed(
            color=HELP_EMBED_COLOR,
            title=f"{self.settings.name} - Help",
            description=self.settings.description,
            timestamp=discord.utils.utcnow(),
        )
        for spec in self.specs:
            icon = COMMAND_ICONS.get(spec.name, "•")
            embed.add_field(name=f"{icon} /{spec.name}", value=spec.description, inline=True)
        embed.add_field(name="⚙️ Prefix", value=self.settings.prefix, inline=True)
        embed.set_footer(text=HELP_FOOTER)
        return embed

    async def dispatch(
        self, interaction: discord.Interaction, command_name: str, options: dict[str, Any] | None = None
    ) -> InteractionContext:
        """Run the handler for `command_name`; the interaction always ends with exactly one reply."""
        ctx = InteractionContext(interaction=interaction, command_name=command_name, options=dict(options or {}))
        handler = self.handlers.get(command_name)
        logging.info(f"/{command_name} (uid:{getattr(interaction.user, 'id', None)}) options={ctx.options}")

        try:
            if handler is None:
                logging.warning("No handler for command '%s'", command_name)
                await ctx.reply(UNKNOWN_COMMAND_MESSAGE)
            else:
                await handler(self, ctx)
            if not ctx.done:
                raise ReplyStateError(f"handler for '{command_name}' returned without replying")
        except Exception:
            logging.exception("Command error: /%s", command_name)
            await send_error_reply(ctx)

        return ctx

    async def on_tree_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError) -> None:
        """
        CommandTree error hook. Only failures raised before a callback runs land
        here (a stale command Discord still shows, or an option that failed to
        convert), so the interaction has not been answered yet.
        """
        if interaction.response.is_done():
            logging.error("Command tree error after reply: %s", error)
            return

        if isinstance(error, app_commands.CommandNotFound):
            ctx = InteractionContext(interaction=interaction, command_name=error.name)
            logging.warning("No command registered for '/%s'", error.name)
            await send_error_reply(ctx, UNKNOWN_COMMAND_MESSAGE)
            return

        command = interaction.command
        ctx = InteractionContext(interaction=interaction, command_name=command.name if command else "")
        logging.error("Command tree error for '/%s': %s", ctx.command_name, error)
        await send_error_reply(ctx)
