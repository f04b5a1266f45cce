from .commands import CommandSpec, OptionSpec, build_command_specs, publish, register_commands
from .context import InteractionContext, ReplyState, ReplyStateError
from .dispatcher import HANDLERS, Dispatcher
from .identity import BotIdentity
from .presence import AppliedPresence, PresenceConfig, PresenceManager

__all__ = [
    "CommandSpec",
    "OptionSpec",
    "build_command_specs",
    "publish",
    "register_commands",
    "InteractionContext",
    "ReplyState",
    "ReplyStateError",
    "HANDLERS",
    "Dispatcher",
    "BotIdentity",
    "AppliedPresence",
    "PresenceConfig",
    "PresenceManager",
]
