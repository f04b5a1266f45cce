"""
YAML configuration validator for config.yaml.

Validates structure and value types of the optional YAML settings file.
Secrets (DISCORD_TOKEN, AI_API_KEY) are expected in the environment and are
not checked here.
"""

from __future__ import annotations

import logging
from typing import Any


logger = logging.getLogger(__name__)

ACTIVITY_KINDS = ("playing", "streaming", "listening", "watching", "competing")
ONLINE_STATUSES = ("online", "idle", "dnd", "invisible")


class ConfigValidationError(Exception):
    """Raised when config validation fails."""
    pass


def _check_type(errors: list[str], section: str, key: str, value: Any, types: tuple[type, ...]) -> None:
    # bool is an int subclass; reject it where a number is expected
    if isinstance(value, bool) and bool not in types:
        ok = False
    else:
        ok = isinstance(value, types)
    if not ok:
        expected = " or ".join(t.__name__ for t in types)
        errors.append(f"'{section}{key}' must be {expected}, got {type(value).__name__}")


def validate_config(cfg: dict[str, Any], config_path: str = "config.yaml") -> None:
    """
    Validation of config.yaml structure and content.

    Raises ConfigValidationError if validation fails.
    Logs detailed error messages before raising.

    Args:
        cfg: The loaded config dictionary
        config_path: Path to config file (for error messages)

    Raises:
        ConfigValidationError: If validation fails
    """
    errors = []
    warnings = []

    # ── Check root structure ────────────────────────────────────────────────
    if not isinstance(cfg, dict):
        errors.append(f"Config root must be a mapping, got {type(cfg).__name__}")
        cfg = {}

    # ── Validate bot section ────────────────────────────────────────────────
    if "bot" in cfg:
        bot = cfg["bot"]
        if not isinstance(bot, dict):
            errors.append(f"'bot' must be a mapping, got {type(bot).__name__}")
        else:
            for key in ("name", "description", "prefix"):
                if key in bot:
                    _check_type(errors, "bot.", key, bot[key], (str,))
            prefix = bot.get("prefix")
            if isinstance(prefix, str):
                if not prefix:
                    errors.append("'bot.prefix' must not be empty")
                elif len(prefix) > 3:
                    warnings.append(f"'bot.prefix' is longer than 3 characters: {prefix!r}")

    # ── Validate ai section ─────────────────────────────────────────────────
    if "ai" in cfg:
        ai = cfg["ai"]
        if not isinstance(ai, dict):
            errors.append(f"'ai' must be a mapping, got {type(ai).__name__}")
        else:
            for key in ("base_url", "model"):
                if key in ai:
                    _check_type(errors, "ai.", key, ai[key], (str,))
            if "max_tokens" in ai:
                _check_type(errors, "ai.", "max_tokens", ai["max_tokens"], (int,))
            for key in ("temperature", "timeout"):
                if key in ai:
                    _check_type(errors, "ai.", key, ai[key], (int, float))
            if "api_key" in ai:
                warnings.append("'ai.api_key' in config file is ignored; set AI_API_KEY in the environment")

    # ── Validate presence section ───────────────────────────────────────────
    if "presence" in cfg:
        presence = cfg["presence"]
        if not isinstance(presence, dict):
            errors.append(f"'presence' must be a mapping, got {type(presence).__name__}")
        else:
            for key in ("activity_type", "activity_text", "status"):
                if key in presence:
                    _check_type(errors, "presence.", key, presence[key], (str,))
            if "mobile" in presence:
                _check_type(errors, "presence.", "mobile", presence["mobile"], (bool,))

            kind = presence.get("activity_type")
            if isinstance(kind, str) and kind not in ACTIVITY_KINDS:
                warnings.append(
                    f"Unknown presence.activity_type '{kind}', falling back to 'watching'. "
                    f"Valid types: {', '.join(ACTIVITY_KINDS)}"
                )
            status = presence.get("status")
            if isinstance(status, str) and status not in ONLINE_STATUSES:
                warnings.append(
                    f"Unknown presence.status '{status}', falling back to 'online'. "
                    f"Valid statuses: {', '.join(ONLINE_STATUSES)}"
                )

    # ── Log warnings ────────────────────────────────────────────────────────
    for warning in warnings:
        logger.warning("Config warning: %s", warning)

    # ── Log errors and raise if any ─────────────────────────────────────────
    if errors:
        logger.error("=" * 70)
        logger.error("CONFIG VALIDATION FAILED (%s)", config_path)
        logger.error("=" * 70)
        for i, error in enumerate(errors, 1):
            logger.error("[%d] %s", i, error)
        logger.error("=" * 70)
        logger.error("Please fix the errors above and restart the bot.")
        logger.error("=" * 70)
        raise ConfigValidationError(f"Config validation failed with {len(errors)} error(s)")
