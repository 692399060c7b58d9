"""Tests for keyword extraction."""

from __future__ import annotations

import httpx
import orjson
import pytest

from agentic_search.core.config import DEFAULT_KEYWORD_PROMPT, ServiceConfig
from agentic_search.core.errors import ExternalServiceError
from agentic_search.retrieval.keywords import KeywordExtractor, render_prompt
from agentic_search.utils.text import split_keywords


def _completion(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _extractor(handler, **config) -> KeywordExtractor:
    service = ServiceConfig(url="http://chat.test/v1", **config)
    return KeywordExtractor(service, timeout=5, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_render_prompt_substitutes_query() -> None:
    assert render_prompt("Keywords for: {query}", "capital of France") == "Keywords for: capital of France"
    assert "capital of France" in render_prompt(DEFAULT_KEYWORD_PROMPT, "capital of France")


def test_split_keywords() -> None:
    assert split_keywords("capital,  France;\n paris ") == ["capital", "France", "paris"]
    assert split_keywords("   ") == []


@pytest.mark.asyncio
async def test_extract_keywords_sends_rendered_prompt() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_completion("capital France"))

    extractor = _extractor(handler, api_key="sk-chat", model="gpt-4o-mini")
    keywords = await extractor.extract_keywords("What is the capital of France?", "Extract: {query}")

    assert keywords == ["capital", "France"]
    request = seen[0]
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-chat"
    body = orjson.loads(request.content)
    assert body["model"] == "gpt-4o-mini"
    assert body["stream"] is False
    assert body["messages"] == [{"role": "user", "content": "Extract: What is the capital of France?"}]


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "  \n "])
async def test_extract_keywords_empty_completion(content) -> None:
    extractor = _extractor(lambda request: httpx.Response(200, json=_completion(content)))

    assert await extractor.extract_keywords("q", "{query}") == []


@pytest.mark.asyncio
async def test_extract_keywords_status_error() -> None:
    extractor = _extractor(lambda request: httpx.Response(429, json={"error": "rate limited"}))

    with pytest.raises(ExternalServiceError) as excinfo:
        await extractor.extract_keywords("q", "{query}")

    assert excinfo.value.backend == "chat"
    assert excinfo.value.kind == "status"


@pytest.mark.asyncio
async def test_extract_keywords_timeout_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ExternalServiceError) as excinfo:
        await _extractor(handler).extract_keywords("q", "{query}")

    assert excinfo.value.kind == "network"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"choices": []}, {"id": "x"}, _completion(["not", "text"])])
async def test_extract_keywords_unparsable(payload) -> None:
    extractor = _extractor(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(ExternalServiceError) as excinfo:
        await extractor.extract_keywords("q", "{query}")

    assert excinfo.value.kind == "unparsable"
