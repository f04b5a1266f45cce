from __future__ import annotations

from dataclasses import dataclass
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv
import yaml

from .validator import validate_config, ConfigValidationError


DEFAULT_CONFIG_FILE = "config.yaml"
CONFIG_ENV_VAR = "CONFIG_PATH"

DEFAULT_BOT_NAME = "AI Assistant Bot"
DEFAULT_BOT_DESCRIPTION = "An intelligent Discord bot powered by AI that can help with various tasks"
DEFAULT_PREFIX = "!"
DEFAULT_AI_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_AI_MODEL = "llama3-8b-8192"
DEFAULT_MAX_TOKENS = 250
DEFAULT_TEMPERATURE = 0.7
DEFAULT_AI_TIMEOUT = 30.0

SETUP_INSTRUCTIONS = """
📋 Setup Instructions:
1. Get your Discord token from: https://discord.com/developers/applications
2. Enable these 3 options in your Discord app:
   - MESSAGE CONTENT INTENT
   - SERVER MEMBERS INTENT
   - PRESENCE INTENT
3. Set DISCORD_TOKEN (and optionally AI_API_KEY) in your environment or .env file
4. Restart the bot
"""


@dataclass(frozen=True)
class BotSettings:
    discord_token: str
    ai_api_key: str | None = None
    ai_base_url: str = DEFAULT_AI_BASE_URL
    ai_model: str = DEFAULT_AI_MODEL
    ai_max_tokens: int = DEFAULT_MAX_TOKENS
    ai_temperature: float = DEFAULT_TEMPERATURE
    ai_timeout: float = DEFAULT_AI_TIMEOUT
    name: str = DEFAULT_BOT_NAME
    description: str = DEFAULT_BOT_DESCRIPTION
    prefix: str = DEFAULT_PREFIX
    activity_type: str = "playing"
    activity_text: str = "with slash commands"
    status: str = "online"
    mobile: bool = False


def get_config_path() -> str:
    """
    Resolve the config path, preferring an explicit environment override.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return env_path
    return DEFAULT_CONFIG_FILE


def _load_raw_config(path: str | None = None) -> dict[str, Any]:
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    cfg_path = path or get_config_path()
    try:
        with open(cfg_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        if not explicit:
            return {}
        logging.error("Config file not found: %s", cfg_path)
        sys.exit(1)
    except yaml.YAMLError as e:
        logging.error("YAML parsing error in %s: %s", cfg_path, e)
        sys.exit(1)

    if not isinstance(data, dict):
        logging.error("Config root must be a mapping, got %s", type(data).__name__)
        sys.exit(1)

    return data


def _env_number(name: str, default: Any, cast: type) -> Any:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logging.error("Environment variable %s must be a number, got %r", name, raw)
        sys.exit(1)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def build_settings(cfg: dict[str, Any]) -> BotSettings | None:
    """
    Merge a validated YAML mapping with the environment.

    Returns None when DISCORD_TOKEN is missing; the caller decides how fatal that is.
    """
    token = (os.environ.get("DISCORD_TOKEN") or "").strip()
    if not token:
        return None

    bot = cfg.get("bot") or {}
    ai = cfg.get("ai") or {}
    presence = cfg.get("presence") or {}

    return BotSettings(
        discord_token=token,
        ai_api_key=(os.environ.get("AI_API_KEY") or "").strip() or None,
        ai_base_url=os.environ.get("AI_BASE_URL") or ai.get("base_url", DEFAULT_AI_BASE_URL),
        ai_model=os.environ.get("AI_MODEL") or ai.get("model", DEFAULT_AI_MODEL),
        ai_max_tokens=_env_number("AI_MAX_TOKENS", ai.get("max_tokens", DEFAULT_MAX_TOKENS), int),
        ai_temperature=_env_number("AI_TEMPERATURE", float(ai.get("temperature", DEFAULT_TEMPERATURE)), float),
        ai_timeout=_env_number("AI_TIMEOUT", float(ai.get("timeout", DEFAULT_AI_TIMEOUT)), float),
        name=os.environ.get("BOT_NAME") or bot.get("name", DEFAULT_BOT_NAME),
        description=os.environ.get("BOT_DESCRIPTION") or bot.get("description", DEFAULT_BOT_DESCRIPTION),
        prefix=os.environ.get("BOT_PREFIX") or bot.get("prefix", DEFAULT_PREFIX),
        activity_type=os.environ.get("BOT_ACTIVITY_TYPE") or presence.get("activity_type", "playing"),
        activity_text=os.environ.get("BOT_ACTIVITY_TEXT") or presence.get("activity_text", "with slash commands"),
        status=os.environ.get("BOT_STATUS") or presence.get("status", "online"),
        mobile=_env_flag("BOT_MOBILE", bool(presence.get("mobile", False))),
    )


def get_settings(path: str | None = None) -> BotSettings:
    """
    Public helper for loading configuration.

    - Loads .env into the process environment (existing vars win).
    - Respects CONFIG_PATH if set; a missing default config.yaml is fine.
    - Validates the YAML file and exits with error code 1 on failure.
    - Exits with error code 1 after printing setup instructions if
      DISCORD_TOKEN is not set.
    """
    load_dotenv()

    logging.info("🔍 Validating Discord token...")
    cfg_path = path or get_config_path()
    cfg = _load_raw_config(path)

    try:
        validate_config(cfg, cfg_path)
    except ConfigValidationError:
        sys.exit(1)

    settings = build_settings(cfg)
    if settings is None:
        logging.error("❌ DISCORD_TOKEN not found in environment variables")
        print(SETUP_INSTRUCTIONS)
        sys.exit(1)

    if not settings.ai_api_key:
        logging.warning("⚠️  AI_API_KEY not found - AI features will be disabled")

    return settings
