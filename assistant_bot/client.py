from __future__ import annotations

import logging

import discord
from discord import app_commands

from .config.loader import BotSettings
from .discord.commands import build_command_specs, publish, register_commands
from .discord.dispatcher import Dispatcher
from .discord.identity import BotIdentity
from .discord.prefix import handle_prefix_message
from .discord.presence import PresenceConfig, PresenceManager
from .llm.completion import CompletionClient


def build_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    intents.members = True
    return intents


class AssistantBot(discord.Client):
    """
    The gateway connection plus everything hanging off it.

    One instance per process; it is handed explicitly to the presence manager
    and the dispatcher instead of living in a module global.
    """

    def __init__(self, settings: BotSettings, completion: CompletionClient | None = None):
        super().__init__(intents=build_intents())
        self.settings = settings
        self.specs = build_command_specs()
        self.completion = completion or CompletionClient(
            api_key=settings.ai_api_key,
            base_url=settings.ai_base_url,
            model=settings.ai_model,
            max_tokens=settings.ai_max_tokens,
            temperature=settings.ai_temperature,
            timeout=settings.ai_timeout,
        )
        self.presence_manager = PresenceManager(self)
        self.dispatcher = Dispatcher(self, self.completion, self.presence_manager, settings, self.specs)
        self.tree = app_commands.CommandTree(self)
        self.tree.error(self.dispatcher.on_tree_error)
        register_commands(self.tree, self.specs, self.dispatcher.dispatch)
        self.identity: BotIdentity | None = None

    def initial_presence(self) -> PresenceConfig:
        return PresenceConfig(
            activity_kind=self.settings.activity_type,
            activity_text=self.settings.activity_text,
            online_status=self.settings.status,
            mobile=self.settings.mobile,
        )

    async def on_ready(self) -> None:
        # on_ready fires again after every gateway reconnect
        if self.identity is not None:
            logging.info("Reconnected as %s", self.user)
            return

        self.identity = BotIdentity.from_client(self)
        logging.info(f"🤖 {self.settings.name} is online!")
        logging.info(f"📊 Bot ID: {self.identity.id}")
        logging.info(f"🌐 Servers: {self.identity.guild_count}")
        logging.info(f"👥 Users: {self.identity.user_count}")

        try:
            await self.presence_manager.apply(self.initial_presence())
        except Exception:
            logging.exception("Failed to set initial presence")

        await publish(self.tree)

    async def on_message(self, message: discord.Message) -> None:
        await handle_prefix_message(message, self.settings.prefix)

    async def on_error(self, event_method: str, /, *args, **kwargs) -> None:
        logging.exception("Discord client error in %s", event_method)

    async def close(self) -> None:
        await self.completion.close()
        await super().close()
