"""Tests for the embedding client."""

from __future__ import annotations

import httpx
import orjson
import pytest

from agentic_search.core.config import ServiceConfig
from agentic_search.core.errors import ExternalServiceError
from agentic_search.retrieval.embeddings import EmbeddingClient


def _client(handler, **config) -> EmbeddingClient:
    service = ServiceConfig(url="http://embeddings.test/v1/", **config)
    return EmbeddingClient(service, timeout=5, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_embed_posts_query_and_reads_first_vector() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [{"embedding": [0.25, -1, 3]}]})

    client = _client(handler, api_key="sk-test", model="text-embedding-3-small")
    vector = await client.embed("capital of France")

    assert vector == [0.25, -1.0, 3.0]
    request = seen[0]
    assert str(request.url) == "http://embeddings.test/v1/embeddings"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert orjson.loads(request.content) == {"input": "capital of France", "model": "text-embedding-3-small"}


@pytest.mark.asyncio
async def test_embed_omits_model_and_auth_when_unset() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [{"embedding": [1.0]}]})

    await _client(handler).embed("q")

    assert "Authorization" not in seen[0].headers
    assert orjson.loads(seen[0].content) == {"input": "q"}


@pytest.mark.asyncio
async def test_embed_status_error() -> None:
    client = _client(lambda request: httpx.Response(500, text="upstream exploded"))

    with pytest.raises(ExternalServiceError) as excinfo:
        await client.embed("q")

    assert excinfo.value.backend == "embedding"
    assert excinfo.value.kind == "status"
    assert "500" in str(excinfo.value)


@pytest.mark.asyncio
async def test_embed_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExternalServiceError) as excinfo:
        await _client(handler).embed("q")

    assert excinfo.value.kind == "network"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"data": []}),
        httpx.Response(200, json={"object": "list"}),
    ],
)
async def test_embed_unparsable_response(response: httpx.Response) -> None:
    with pytest.raises(ExternalServiceError) as excinfo:
        await _client(lambda request: response).embed("q")

    assert excinfo.value.kind == "unparsable"
