import unittest
from unittest.mock import AsyncMock, MagicMock

from assistant_bot.discord.prefix import handle_prefix_message, prefix_reply


class TestPrefixReply(unittest.TestCase):
    def test_known_commands(self):
        self.assertEqual(prefix_reply("!ping", "!"), "🏓 Pong! Use `/ping` for detailed latency info.")
        self.assertEqual(prefix_reply("!HELP me", "!"), "📋 Use `/help` to see all available commands!")

    def test_unknown_command(self):
        self.assertEqual(prefix_reply("!dance", "!"), "❓ Unknown command. Use `!help` or `/help`")
        self.assertEqual(prefix_reply("!", "!"), "❓ Unknown command. Use `!help` or `/help`")

    def test_multi_character_prefix(self):
        self.assertEqual(prefix_reply("?? ping", "??"), "🏓 Pong! Use `/ping` for detailed latency info.")
        self.assertIsNone(prefix_reply("?ping", "??"))

    def test_plain_messages_ignored(self):
        self.assertIsNone(prefix_reply("hello !ping", "!"))
        self.assertIsNone(prefix_reply("", "!"))


class TestHandlePrefixMessage(unittest.IsolatedAsyncioTestCase):
    def make_message(self, content, bot=False):
        message = MagicMock()
        message.content = content
        message.author.bot = bot
        message.reply = AsyncMock()
        return message

    async def test_replies_to_prefix_command(self):
        message = self.make_message("!ping")
        self.assertTrue(await handle_prefix_message(message, "!"))
        message.reply.assert_awaited_once_with("🏓 Pong! Use `/ping` for detailed latency info.")

    async def test_ignores_bots(self):
        message = self.make_message("!ping", bot=True)
        self.assertFalse(await handle_prefix_message(message, "!"))
        message.reply.assert_not_awaited()

    async def test_ignores_plain_text(self):
        message = self.make_message("just chatting")
        self.assertFalse(await handle_prefix_message(message, "!"))
        message.reply.assert_not_awaited()


if __name__ == "__main__":
    unittest.main()
