"""
assistant_bot/llm/completion.py

One-shot chat completion against an OpenAI-compatible endpoint (GROQ by default).

`CompletionClient.ask` never raises: every failure is logged and turned into a
fixed, user-displayable string from llm/errors.py, so callers can forward the
result to Discord as-is.
"""

from __future__ import annotations

import logging

import httpx
from openai import AsyncOpenAI

from .errors import (
    NOT_CONFIGURED_MESSAGE,
    LLMResponseError,
    format_user_friendly_error,
    parse_error_message,
)


SYSTEM_PROMPT = "You are a helpful Discord bot assistant. Keep responses concise and friendly."
EMPTY_RESPONSE = "(No response)"


class CompletionClient:
    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        model: str,
        max_tokens: int = 250,
        temperature: float = 0.7,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        api_key:     bearer credential; None/empty disables ask() without network I/O
        base_url:    OpenAI-compatible API root, e.g. https://api.groq.com/openai/v1
        http_client: optional httpx client (tests pass one with a MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self._http_client = http_client
        self._client: AsyncOpenAI | None = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    def build_messages(self, question: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": question},
        ]

    async def ask(self, question: str) -> str:
        if not self.configured:
            return NOT_CONFIGURED_MESSAGE

        try:
            response = await self._get_client().chat.completions.create(
                model=self.model,
                messages=self.build_messages(question),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            choice = response.choices[0] if response.choices else None
            if choice is None or choice.message is None:
                raise LLMResponseError("completion response contained no choices")
        except Exception as e:  # noqa: BLE001
            logging.error("AI API error: %s", parse_error_message(e))
            return format_user_friendly_error(e)

        return choice.message.content or EMPTY_RESPONSE

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
