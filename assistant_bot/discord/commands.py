"""
Slash command catalog.

The catalog is the single source of truth for the command surface: it is
turned into `app_commands.Command` objects on the bot's CommandTree at startup
and into the /help embed at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Awaitable, Callable, Iterable, Literal, Mapping, Optional

import discord
from discord import app_commands


OPTION_TYPES: dict[str, discord.AppCommandOptionType] = {
    "string": discord.AppCommandOptionType.string,
    "boolean": discord.AppCommandOptionType.boolean,
}

COMMAND_DESCRIPTIONS: dict[str, str] = {
    "ping": "Check bot latency",
    "help": "Show available commands",
    "ai": "Ask AI a question",
    "status": "Change bot status",
    "say": "Make the bot say something",
}

ACTIVITY_CHOICES = (
    ("Playing", "playing"),
    ("Watching", "watching"),
    ("Listening", "listening"),
    ("Streaming", "streaming"),
    ("Competing", "competing"),
)

PRESENCE_CHOICES = (
    ("Online", "online"),
    ("Idle", "idle"),
    ("Do Not Disturb", "dnd"),
    ("Invisible", "invisible"),
)

# (interaction, command name, option values) -> handled
Route = Callable[[discord.Interaction, str, dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class OptionSpec:
    name: str
    description: str
    kind: Literal["string", "boolean"] = "string"
    required: bool = False
    choices: tuple[tuple[str, str], ...] = ()

    @property
    def option_type(self) -> discord.AppCommandOptionType:
        return OPTION_TYPES[self.kind]

    def app_choices(self) -> list[app_commands.Choice[str]]:
        return [app_commands.Choice(name=label, value=value) for label, value in self.choices]


@dataclass(frozen=True)
class CommandSpec:
    name: str
    description: str
    options: tuple[OptionSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        names = [o.name for o in self.options]
        if len(names) != len(set(names)):
            raise ValueError(f"Command '{self.name}' has duplicate option names: {names}")


def build_command_specs(descriptions: Mapping[str, str] | None = None) -> tuple[CommandSpec, ...]:
    d = {**COMMAND_DESCRIPTIONS, **(descriptions or {})}
    return (
        CommandSpec("ping", d["ping"]),
        CommandSpec("help", d["help"]),
        CommandSpec(
            "ai",
            d["ai"],
            (OptionSpec("question", "Your question for the AI", required=True),),
        ),
        CommandSpec(
            "status",
            d["status"],
            (
                OptionSpec("type", "Activity type", required=True, choices=ACTIVITY_CHOICES),
                OptionSpec("text", "Status text", required=True),
                OptionSpec("presence", "Bot presence", required=False, choices=PRESENCE_CHOICES),
                OptionSpec("mobile", "Show mobile indicator", kind="boolean", required=False),
            ),
        ),
        CommandSpec(
            "say",
            d["say"],
            (OptionSpec("message", "Message to say", required=True),),
        ),
    )


def build_callbacks(route: Route) -> dict[str, Callable[..., Awaitable[Any]]]:
    """Slash callbacks that forward the parsed option values to `route`."""

    async def ping(interaction: discord.Interaction) -> None:
        await route(interaction, "ping", {})

    async def help(interaction: discord.Interaction) -> None:
        await route(interaction, "help", {})

    async def ai(interaction: discord.Interaction, question: str) -> None:
        await route(interaction, "ai", {"question": question})

    async def status(
        interaction: discord.Interaction,
        type: str,
        text: str,
        presence: Optional[str] = None,
        mobile: Optional[bool] = None,
    ) -> None:
        await route(interaction, "status", {"type": type, "text": text, "presence": presence, "mobile": mobile})

    async def say(interaction: discord.Interaction, message: str) -> None:
        await route(interaction, "say", {"message": message})

    return {"ping": ping, "help": help, "ai": ai, "status": status, "say": say}


def build_app_command(spec: CommandSpec, callback: Callable[..., Awaitable[Any]]) -> app_commands.Command:
    """
    Wrap `callback` as a slash command named and described by `spec`.

    Option descriptions and choices come from the catalog. The callback's
    signature must declare the same options (name, type, required) in the
    same order, otherwise ValueError is raised.
    """
    descriptions = {o.name: o.description for o in spec.options}
    choices = {o.name: o.app_choices() for o in spec.options if o.choices}
    if descriptions:
        callback = app_commands.describe(**descriptions)(callback)
    if choices:
        callback = app_commands.choices(**choices)(callback)

    command = app_commands.Command(name=spec.name, description=spec.description, callback=callback)

    declared = [(o.name, o.option_type, o.required) for o in spec.options]
    actual = [(p.name, p.type, p.required) for p in command.parameters]
    if declared != actual:
        raise ValueError(f"Callback for '/{spec.name}' takes {actual}, catalog declares {declared}")
    return command


def register_commands(
    tree: app_commands.CommandTree, specs: Iterable[CommandSpec], route: Route
) -> list[app_commands.Command]:
    """Add one global slash command per spec to `tree`, each forwarding to `route`."""
    callbacks = build_callbacks(route)
    registered = []
    for spec in specs:
        command = build_app_command(spec, callbacks[spec.name])
        tree.add_command(command)
        registered.append(command)
    return registered


async def publish(tree: app_commands.CommandTree) -> bool:
    """
    Replace the application's global command set with the commands on `tree`.

    Failures are logged and leave the previously registered commands in place;
    there is no retry.
    """
    logging.info("🔄 Refreshing slash commands...")
    try:
        synced = await tree.sync()
    except (discord.HTTPException, app_commands.MissingApplicationID):
        logging.exception("❌ Error registering slash commands")
        return False
    logging.info(f"✅ Registered {len(synced)} slash commands successfully!")
    return True
