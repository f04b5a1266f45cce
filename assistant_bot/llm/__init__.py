from .completion import CompletionClient, SYSTEM_PROMPT
from .errors import (
    LLMError,
    LLMAuthError,
    LLMConnectionError,
    LLMRateLimitError,
    LLMResponseError,
    format_user_friendly_error,
    parse_error_message,
)

__all__ = [
    "CompletionClient",
    "SYSTEM_PROMPT",
    "LLMError",
    "LLMAuthError",
    "LLMConnectionError",
    "LLMRateLimitError",
    "LLMResponseError",
    "format_user_friendly_error",
    "parse_error_message",
]
