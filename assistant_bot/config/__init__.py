from .loader import BotSettings, get_settings
from .validator import ConfigValidationError, validate_config

__all__ = [
    "BotSettings",
    "get_settings",
    "ConfigValidationError",
    "validate_config",
]
