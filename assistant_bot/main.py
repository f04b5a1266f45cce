"""
Process entry point: `python -m assistant_bot` or the `assistant-bot` script.
"""

import asyncio
import logging
import os
import sys

import discord

from assistant_bot.client import AssistantBot
from assistant_bot.config.loader import BotSettings, get_settings


def setup_logging() -> None:
    if os.environ.get("DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s: %(message)s")
        logging.getLogger("httpx").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")
        logging.getLogger("httpx").setLevel(logging.WARNING)


async def run_bot(settings: BotSettings) -> None:
    async with AssistantBot(settings) as bot:
        await bot.start(settings.discord_token)


def main() -> None:
    setup_logging()
    settings = get_settings()
    logging.info(f"🚀 {settings.name} starting | model: {settings.ai_model} | AI: {'on' if settings.ai_api_key else 'off'}")

    try:
        asyncio.run(run_bot(settings))
    except discord.LoginFailure as e:
        logging.error("❌ Failed to login: %s", e)
        logging.error("💡 Please check your DISCORD_TOKEN")
        sys.exit(1)
    except discord.PrivilegedIntentsRequired as e:
        logging.error("❌ Failed to connect: %s", e)
        logging.error("💡 Enable MESSAGE CONTENT and SERVER MEMBERS intents for your app in the developer portal")
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
