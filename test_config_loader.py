import contextlib
import io
import os
from pathlib import Path
import tempfile
import unittest
from unittest.mock import patch

from assistant_bot.config.loader import (
    DEFAULT_AI_MODEL,
    BotSettings,
    build_settings,
    get_settings,
)
from assistant_bot.config.validator import ConfigValidationError, validate_config


VALID_CONFIG = {
    "bot": {"name": "Helper", "description": "Helps", "prefix": "?"},
    "ai": {"base_url": "http://localhost:8080/v1", "model": "local", "max_tokens": 100, "temperature": 0.2, "timeout": 5},
    "presence": {"activity_type": "listening", "activity_text": "requests", "status": "idle", "mobile": True},
}


class TestValidateConfig(unittest.TestCase):
    def test_valid_config_passes(self):
        validate_config(VALID_CONFIG)
        validate_config({})

    def test_type_errors_fail(self):
        bad_configs = [
            {"bot": "not a mapping"},
            {"bot": {"prefix": ""}},
            {"ai": {"max_tokens": "many"}},
            {"ai": {"max_tokens": True}},
            {"ai": {"temperature": "hot"}},
            {"presence": {"mobile": "yes"}},
            {"presence": []},
        ]
        for cfg in bad_configs:
            with self.subTest(cfg=cfg):
                with self.assertLogs("assistant_bot.config.validator", level="ERROR"):
                    with self.assertRaises(ConfigValidationError):
                        validate_config(cfg)

    def test_unknown_presence_values_only_warn(self):
        cfg = {"presence": {"activity_type": "dancing", "status": "away"}}
        with self.assertLogs("assistant_bot.config.validator", level="WARNING") as logs:
            validate_config(cfg)
        output = "\n".join(logs.output)
        self.assertIn("falling back to 'watching'", output)
        self.assertIn("falling back to 'online'", output)

    def test_api_key_in_file_warns(self):
        with self.assertLogs("assistant_bot.config.validator", level="WARNING") as logs:
            validate_config({"ai": {"api_key": "gsk_secret"}})
        self.assertIn("ignored", "\n".join(logs.output))


class TestBuildSettings(unittest.TestCase):
    def test_missing_token_returns_none(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(build_settings({}))

    def test_defaults(self):
        with patch.dict(os.environ, {"DISCORD_TOKEN": "tok"}, clear=True):
            settings = build_settings({})
        self.assertEqual(settings, BotSettings(discord_token="tok"))
        self.assertIsNone(settings.ai_api_key)
        self.assertEqual(settings.ai_model, DEFAULT_AI_MODEL)
        self.assertEqual(settings.prefix, "!")
        self.assertEqual(
            (settings.activity_type, settings.activity_text, settings.status, settings.mobile),
            ("playing", "with slash commands", "online", False),
        )

    def test_yaml_values_used(self):
        with patch.dict(os.environ, {"DISCORD_TOKEN": "tok"}, clear=True):
            settings = build_settings(VALID_CONFIG)
        self.assertEqual(settings.name, "Helper")
        self.assertEqual(settings.prefix, "?")
        self.assertEqual(settings.ai_base_url, "http://localhost:8080/v1")
        self.assertEqual(settings.ai_max_tokens, 100)
        self.assertEqual(settings.ai_timeout, 5.0)
        self.assertEqual(settings.status, "idle")
        self.assertTrue(settings.mobile)

    def test_environment_overrides_yaml(self):
        env = {
            "DISCORD_TOKEN": "tok",
            "AI_API_KEY": "gsk_key",
            "AI_MODEL": "mixtral",
            "AI_MAX_TOKENS": "500",
            "AI_TEMPERATURE": "1.1",
            "BOT_NAME": "Env Bot",
            "BOT_PREFIX": "$",
            "BOT_STATUS": "dnd",
            "BOT_MOBILE": "false",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = build_settings(VALID_CONFIG)
        self.assertEqual(settings.ai_api_key, "gsk_key")
        self.assertEqual(settings.ai_model, "mixtral")
        self.assertEqual(settings.ai_max_tokens, 500)
        self.assertEqual(settings.ai_temperature, 1.1)
        self.assertEqual(settings.name, "Env Bot")
        self.assertEqual(settings.prefix, "$")
        self.assertEqual(settings.status, "dnd")
        self.assertFalse(settings.mobile)

    def test_bad_number_is_fatal(self):
        with patch.dict(os.environ, {"DISCORD_TOKEN": "tok", "AI_MAX_TOKENS": "lots"}, clear=True):
            with self.assertLogs(level="ERROR"):
                with self.assertRaises(SystemExit) as cm:
                    build_settings({})
        self.assertEqual(cm.exception.code, 1)


@patch("assistant_bot.config.loader.load_dotenv")
class TestGetSettings(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.config_path = Path(self.tmp.name) / "config.yaml"

    def test_missing_token_exits_with_instructions(self, _load_dotenv):
        stdout = io.StringIO()
        with patch.dict(os.environ, {"CONFIG_PATH": ""}, clear=True), patch(
            "assistant_bot.config.loader.DEFAULT_CONFIG_FILE", str(self.config_path)
        ):
            with contextlib.redirect_stdout(stdout), self.assertLogs(level="ERROR"):
                with self.assertRaises(SystemExit) as cm:
                    get_settings()
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Setup Instructions", stdout.getvalue())

    def test_missing_default_config_file_is_fine(self, _load_dotenv):
        with patch.dict(os.environ, {"DISCORD_TOKEN": "tok", "AI_API_KEY": "gsk_x"}, clear=True), patch(
            "assistant_bot.config.loader.DEFAULT_CONFIG_FILE", str(self.config_path)
        ):
            settings = get_settings()
        self.assertEqual(settings.discord_token, "tok")

    def test_missing_ai_key_warns(self, _load_dotenv):
        with patch.dict(os.environ, {"DISCORD_TOKEN": "tok"}, clear=True), patch(
            "assistant_bot.config.loader.DEFAULT_CONFIG_FILE", str(self.config_path)
        ):
            with self.assertLogs(level="WARNING") as logs:
                settings = get_settings()
        self.assertIsNone(settings.ai_api_key)
        self.assertIn("AI features will be disabled", "\n".join(logs.output))

    def test_explicit_missing_config_file_is_fatal(self, _load_dotenv):
        with patch.dict(os.environ, {"DISCORD_TOKEN": "tok"}, clear=True):
            with self.assertLogs(level="ERROR"), self.assertRaises(SystemExit):
                get_settings(str(self.config_path))

    def test_config_path_env_var(self, _load_dotenv):
        self.config_path.write_text("bot:\n  name: From File\n", encoding="utf-8")
        env = {"DISCORD_TOKEN": "tok", "AI_API_KEY": "gsk_x", "CONFIG_PATH": str(self.config_path)}
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()
        self.assertEqual(settings.name, "From File")

    def test_invalid_config_file_exits(self, _load_dotenv):
        self.config_path.write_text("ai:\n  max_tokens: lots\n", encoding="utf-8")
        with patch.dict(os.environ, {"DISCORD_TOKEN": "tok"}, clear=True):
            with self.assertLogs(level="ERROR"), self.assertRaises(SystemExit) as cm:
                get_settings(str(self.config_path))
        self.assertEqual(cm.exception.code, 1)

    def test_malformed_yaml_exits(self, _load_dotenv):
        self.config_path.write_text("bot: [unclosed\n", encoding="utf-8")
        with patch.dict(os.environ, {"DISCORD_TOKEN": "tok"}, clear=True):
            with self.assertLogs(level="ERROR"), self.assertRaises(SystemExit):
                get_settings(str(self.config_path))


if __name__ == "__main__":
    unittest.main()
