"""Google Gemini text generation over the REST API."""

from __future__ import annotations

import asyncio
import logging
import random
import re
from typing import Any, Awaitable, Callable

import httpx

from .base import TextGenerationError, TextGenerationService

RETRYABLE_STATUS_CODES = frozenset({429, 500, 503, 504})
_CODE_FENCE = re.compile(r"```(?:json)?")


class GeminiClient(TextGenerationService):
    """Call ``models/{model}:generateContent`` with retries on transient failures."""

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        max_retries: int = 2,
        base_delay_ms: int = 800,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self._base_url = base_url.rstrip("/")
        self._max_retries = max(0, max_retries)
        self._base_delay = base_delay_ms / 1000
        self._timeout = timeout
        self._transport = transport
        self._sleep = sleep
        self._logger = logging.getLogger("barista.llm")

    async def generate(self, system_instructions: str, user_instructions: str) -> str:
        if not self._api_key:
            raise TextGenerationError("Missing Gemini API key")

        payload = {
            "system_instruction": {"parts": [{"text": system_instructions}]},
            "contents": [{"role": "user", "parts": [{"text": user_instructions}]}],
        }
        url = f"{self._base_url}/models/{self.model}:generateContent"
        headers = {"x-goog-api-key": self._api_key, "Content-Type": "application/json"}

        attempt = 0
        while True:
            try:
                async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                    response = await client.post(url, headers=headers, json=payload)
                    response.raise_for_status()
                    return _extract_text(response.json())
            except (httpx.HTTPStatusError, httpx.TransportError) as exc:
                retryable = _is_retryable(exc)
                self._logger.warning("Gemini attempt %d failed: %s", attempt, exc)
                if not retryable or attempt >= self._max_retries:
                    raise TextGenerationError(f"Gemini request failed: {exc}") from exc
            except ValueError as exc:
                raise TextGenerationError(f"Gemini returned an unreadable response: {exc}") from exc

            await self._sleep(self._base_delay * 2**attempt + random.uniform(0, 0.2))
            attempt += 1


def _is_retryable(exc: httpx.HTTPError) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return True


def _extract_text(data: Any) -> str:
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not candidates:
        raise TextGenerationError("Gemini returned no candidates")

    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict)).strip()
    if not text:
        raise TextGenerationError("Gemini returned empty text")
    return text


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""

    return _CODE_FENCE.sub("", text).strip()
