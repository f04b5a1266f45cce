from __future__ import annotations

import logging

from .context import InteractionContext, ReplyState


COMMAND_ERROR_MESSAGE = "There was an error executing this command!"


async def send_error_reply(ctx: InteractionContext, message: str = COMMAND_ERROR_MESSAGE) -> bool:
    """
    Terminate a failed interaction with `message`.

    Replies if nothing was sent yet, edits the deferred reply otherwise.
    An interaction that already has its reply is left alone. Returns whether
    the error text was delivered.
    """
    try:
        if ctx.reply_state is ReplyState.UNSENT:
            await ctx.reply(message)
        elif ctx.reply_state is ReplyState.DEFERRED:
            await ctx.edit(message)
        else:
            logging.warning("Command '%s' failed after replying; no error reply sent", ctx.command_name)
            return False
    except Exception as e:  # noqa: BLE001
        logging.warning("Could not send error reply for '%s': %s", ctx.command_name, e)
        return False
    return True
