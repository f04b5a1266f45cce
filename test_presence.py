import unittest
from unittest.mock import AsyncMock, MagicMock

import discord

from assistant_bot.discord.presence import (
    MOBILE_PLATFORM,
    PresenceConfig,
    PresenceManager,
    resolve_activity_type,
    resolve_status,
)


class TestPresenceTables(unittest.TestCase):
    def test_known_activity_kinds(self):
        expected = {
            "playing": discord.ActivityType.playing,
            "streaming": discord.ActivityType.streaming,
            "listening": discord.ActivityType.listening,
            "watching": discord.ActivityType.watching,
            "competing": discord.ActivityType.competing,
        }
        for kind, activity_type in expected.items():
            with self.subTest(kind=kind):
                self.assertEqual(resolve_activity_type(kind), (kind, activity_type))

    def test_unknown_activity_falls_back_to_watching(self):
        for kind in ("dancing", "", None, "custom"):
            with self.subTest(kind=kind):
                self.assertEqual(resolve_activity_type(kind), ("watching", discord.ActivityType.watching))

    def test_known_statuses(self):
        for name in ("online", "idle", "dnd", "invisible"):
            with self.subTest(status=name):
                key, status = resolve_status(name)
                self.assertEqual(key, name)
                self.assertEqual(status, discord.Status(name))

    def test_unknown_status_falls_back_to_online(self):
        for name in ("away", "", None, "offline"):
            with self.subTest(status=name):
                self.assertEqual(resolve_status(name), ("online", discord.Status.online))


class TestPresenceManager(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = MagicMock()
        self.client.change_presence = AsyncMock()
        self.manager = PresenceManager(self.client)

    async def test_apply_publishes_once(self):
        applied = await self.manager.apply(PresenceConfig("playing", "with tests", "idle", True))

        self.client.change_presence.assert_awaited_once()
        kwargs = self.client.change_presence.await_args.kwargs
        self.assertEqual(kwargs["status"], discord.Status.idle)
        self.assertEqual(kwargs["activity"].type, discord.ActivityType.playing)
        self.assertEqual(kwargs["activity"].name, "with tests")

        self.assertEqual(applied.activity_kind, "playing")
        self.assertEqual(applied.activity_text, "with tests")
        self.assertEqual(applied.online_status, "idle")
        self.assertTrue(applied.mobile)
        self.assertEqual(applied.platform, MOBILE_PLATFORM)

    def test_mobile_flag_does_not_change_gateway_call(self):
        _, plain = self.manager.build(PresenceConfig("playing", "chess", "idle", False))
        applied, mobile = self.manager.build(PresenceConfig("playing", "chess", "idle", True))

        self.assertEqual(set(mobile), {"activity", "status"})
        self.assertEqual(set(mobile), set(plain))
        self.assertEqual(mobile["status"], plain["status"])
        self.assertEqual(mobile["activity"].type, plain["activity"].type)
        self.assertEqual(mobile["activity"].name, plain["activity"].name)
        self.assertEqual(applied.platform, MOBILE_PLATFORM)

    async def test_apply_defaults_unknown_values(self):
        applied = await self.manager.apply(PresenceConfig("juggling", "balls", "busy", False))

        kwargs = self.client.change_presence.await_args.kwargs
        self.assertEqual(kwargs["activity"].type, discord.ActivityType.watching)
        self.assertEqual(kwargs["status"], discord.Status.online)
        self.assertEqual(applied.activity_kind, "watching")
        self.assertEqual(applied.online_status, "online")
        self.assertIsNone(applied.platform)

    async def test_apply_is_idempotent(self):
        cfg = PresenceConfig("listening", "lofi", "dnd", False)
        first = await self.manager.apply(cfg)
        second = await self.manager.apply(cfg)

        self.assertEqual(first, second)
        self.assertEqual(self.client.change_presence.await_count, 2)
        calls = self.client.change_presence.await_args_list
        self.assertEqual(calls[0].kwargs["status"], calls[1].kwargs["status"])
        self.assertEqual(calls[0].kwargs["activity"].to_dict(), calls[1].kwargs["activity"].to_dict())

    async def test_platform_errors_propagate(self):
        self.client.change_presence.side_effect = ConnectionResetError("gateway closed")

        with self.assertRaises(ConnectionResetError):
            await self.manager.apply(PresenceConfig())


if __name__ == "__main__":
    unittest.main()
