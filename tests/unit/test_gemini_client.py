import asyncio
import json

import httpx
import pytest

from barista.llm.base import TextGenerationError
from barista.llm.gemini import GeminiClient, strip_code_fences

OK_BODY = {"candidates": [{"content": {"parts": [{"text": "Try the "}, {"text": "Guji natural."}]}}]}


class FakeSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def scripted_transport(statuses, calls):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        status = statuses[min(len(calls) - 1, len(statuses) - 1)]
        if status == 200:
            return httpx.Response(200, json=OK_BODY)
        return httpx.Response(status, json={"error": {"message": "The model is overloaded."}})

    return httpx.MockTransport(handler)


def make_client(statuses, calls, sleep=None, **kwargs):
    return GeminiClient(
        "test-key",
        transport=scripted_transport(statuses, calls),
        sleep=sleep or FakeSleep(),
        **kwargs,
    )


def test_generate_posts_instructions_and_joins_parts():
    calls = []
    text = asyncio.run(make_client([200], calls).generate("be nice", "Customer: hi"))

    assert text == "Try the Guji natural."
    request = calls[0]
    assert request.url.path.endswith("/models/gemini-2.5-flash:generateContent")
    assert request.headers["x-goog-api-key"] == "test-key"
    body = json.loads(request.content)
    assert body["system_instruction"]["parts"][0]["text"] == "be nice"
    assert body["contents"][0]["parts"][0]["text"] == "Customer: hi"


def test_retries_transient_status_with_backoff():
    calls = []
    sleep = FakeSleep()
    text = asyncio.run(make_client([503, 429, 200], calls, sleep=sleep).generate("s", "u"))

    assert text == "Try the Guji natural."
    assert len(calls) == 3
    assert len(sleep.delays) == 2
    assert 0.8 <= sleep.delays[0] <= 1.0
    assert 1.6 <= sleep.delays[1] <= 1.8


def test_gives_up_after_max_retries():
    calls = []
    with pytest.raises(TextGenerationError):
        asyncio.run(make_client([503], calls, max_retries=2).generate("s", "u"))

    assert len(calls) == 3


def test_non_retryable_status_fails_immediately():
    calls = []
    sleep = FakeSleep()
    with pytest.raises(TextGenerationError):
        asyncio.run(make_client([400], calls, sleep=sleep).generate("s", "u"))

    assert len(calls) == 1
    assert sleep.delays == []


def test_missing_api_key_fails_without_calling():
    calls = []
    client = GeminiClient(None, transport=scripted_transport([200], calls))

    with pytest.raises(TextGenerationError, match="Missing Gemini API key"):
        asyncio.run(client.generate("s", "u"))
    assert calls == []


def test_empty_candidates_is_an_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
    client = GeminiClient("k", transport=transport, sleep=FakeSleep())

    with pytest.raises(TextGenerationError):
        asyncio.run(client.generate("s", "u"))


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences("plain") == "plain"
