from __future__ import annotations

import openai


NOT_CONFIGURED_MESSAGE = "AI API key not configured. Please set AI_API_KEY in your environment variables."
INVALID_KEY_MESSAGE = "Invalid GROQ API key. Please check your AI_API_KEY in environment variables."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait a moment before trying again."
NETWORK_ERROR_MESSAGE = "Network error: Unable to connect to AI service. Please try again later."
GENERIC_ERROR_MESSAGE = "Sorry, I couldn't process your request right now. Please try again later."


class LLMError(Exception):
    """Base error for LLM-related failures."""


class LLMRateLimitError(LLMError):
    pass


class LLMAuthError(LLMError):
    pass


class LLMConnectionError(LLMError):
    pass


class LLMResponseError(LLMError):
    """The upstream answered, but not with a usable completion."""


def classify_error(error: Exception) -> type[LLMError]:
    """
    Map an openai/httpx exception onto the LLMError taxonomy.
    """
    if isinstance(error, LLMError):
        return type(error)
    if isinstance(error, openai.AuthenticationError):
        return LLMAuthError
    if isinstance(error, openai.RateLimitError):
        return LLMRateLimitError
    if isinstance(error, openai.APIStatusError):
        if error.status_code == 401:
            return LLMAuthError
        if error.status_code == 429:
            return LLMRateLimitError
        return LLMError
    # APITimeoutError subclasses APIConnectionError; a slow upstream is not a network error
    if isinstance(error, openai.APITimeoutError):
        return LLMError
    if isinstance(error, openai.APIConnectionError):
        return LLMConnectionError
    return LLMError


def parse_error_message(error: Exception) -> str:
    """
    Short, detailed description of an upstream failure for logs.
    """
    s, t = str(error), type(error).__name__
    status = getattr(error, "status_code", None)
    if status is not None:
        return f"{t} (HTTP {status}): {s.split(chr(10))[0][:200]}"
    cause = error.__cause__
    if cause is not None:
        return f"{t}: {s.split(chr(10))[0][:100]} (caused by {type(cause).__name__}: {cause})"
    return f"{t}: {s.split(chr(10))[0][:200]}"


def format_user_friendly_error(error: Exception) -> str:
    """
    Fixed, safe error message suitable for end users.
    """
    kind = classify_error(error)
    if kind is LLMAuthError:
        return INVALID_KEY_MESSAGE
    if kind is LLMRateLimitError:
        return RATE_LIMIT_MESSAGE
    if kind is LLMConnectionError:
        return NETWORK_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE
