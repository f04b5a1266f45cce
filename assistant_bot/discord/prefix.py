from __future__ import annotations

import discord


def prefix_reply(content: str, prefix: str) -> str | None:
    """Reply text for a legacy prefix command, or None if `content` is not one."""
    if not prefix or not content.startswith(prefix):
        return None

    args = content[len(prefix):].split()
    command = args[0].lower() if args else ""

    if command == "ping":
        return "🏓 Pong! Use `/ping` for detailed latency info."
    if command == "help":
        return "📋 Use `/help` to see all available commands!"
    return f"❓ Unknown command. Use `{prefix}help` or `/help`"


async def handle_prefix_message(message: discord.Message, prefix: str) -> bool:
    if message.author.bot:
        return False
    text = prefix_reply(message.content, prefix)
    if text is None:
        return False
    await message.reply(text)
    return True
